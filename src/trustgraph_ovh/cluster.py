import pulumi as p
import pulumi_kubernetes as k8s
import pulumi_ovh as ovh

from trustgraph_ovh.config import ComponentConfig
from trustgraph_ovh.network import VRACK_GATEWAY, PrivateNetwork

# Autoscaling headroom above the configured node count
EXTRA_MAX_NODES = 2


class KubeCluster(p.ComponentResource):
    """
    OVHcloud managed Kubernetes cluster with one node pool.

    Optionally creates a public cloud user for workload access and S3
    credentials for it.
    """

    def __init__(
        self,
        name: str,
        component_config: ComponentConfig,
        network: PrivateNetwork,
        ovh_provider: ovh.Provider,
    ):
        super().__init__('trustgraph:ovh:KubeCluster', name)

        ovh_opts = p.ResourceOptions(provider=ovh_provider, parent=self)

        private_network_args = {}
        if component_config.private_network_routing:
            private_network_args = {
                'private_network_id': network.network_id,
                'private_network_configuration': ovh.cloudproject.KubePrivateNetworkConfigurationArgs(
                    default_vrack_gateway=VRACK_GATEWAY,
                    private_network_routing_as_default=True,
                ),
            }

        # The cluster does not reference the subnet but cannot be created before it exists
        self.cluster = ovh.cloudproject.Kube(
            'cluster',
            service_name=component_config.service_name,
            name=f'{component_config.prefix}-cluster',
            region=component_config.region,
            version=component_config.kubernetes_version,
            **private_network_args,
            opts=p.ResourceOptions.merge(ovh_opts, p.ResourceOptions(depends_on=[network.subnet])),
        )

        self.node_pool = ovh.cloudproject.KubeNodePool(
            'node-pool',
            service_name=component_config.service_name,
            kube_id=self.cluster.id,
            name=f'{component_config.prefix}-pool',
            flavor_name=component_config.node_size,
            desired_nodes=component_config.node_count,
            min_nodes=component_config.node_count,
            max_nodes=component_config.node_count + EXTRA_MAX_NODES,
            opts=ovh_opts,
        )

        self.user = None
        self.s3_credentials = None
        if component_config.service_account:
            self.user = ovh.cloudproject.User(
                'ai-user',
                service_name=component_config.service_name,
                description='TrustGraph AI service account',
                opts=p.ResourceOptions.merge(ovh_opts, p.ResourceOptions(depends_on=[self.node_pool])),
            )

            if component_config.s3_credentials:
                self.s3_credentials = ovh.cloudproject.S3Credential(
                    's3-credentials',
                    service_name=component_config.service_name,
                    user_id=self.user.id,
                    opts=ovh_opts,
                )

        # Only hand out the kubeconfig once there are nodes to schedule on
        self.kubeconfig: p.Output[str] = p.Output.secret(
            p.Output.all(self.node_pool.id, self.cluster.kubeconfig).apply(lambda args: args[1])
        )
        self.cluster_id = self.cluster.id

        self.register_outputs(
            {
                'cluster_id': self.cluster_id,
                'kubeconfig': self.kubeconfig,
            }
        )

    def k8s_provider(self) -> k8s.Provider:
        """Provider scoped to the Kubernetes API of this cluster."""
        return k8s.Provider('k8sProvider', kubeconfig=self.kubeconfig)
