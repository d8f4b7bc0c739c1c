import typing as t

import pulumi as p
import pulumi_kubernetes as k8s
import pulumi_ovh as ovh

from trustgraph_ovh.cluster import KubeCluster
from trustgraph_ovh.config import ComponentConfig, load_config
from trustgraph_ovh.kubeconfig import parse_cluster_endpoint, save_kubeconfig
from trustgraph_ovh.network import PrivateNetwork
from trustgraph_ovh.workloads import Workloads, create_workloads, read_manifests


class Deployment(t.NamedTuple):
    network: PrivateNetwork
    cluster: KubeCluster
    k8s_provider: k8s.Provider
    workloads: Workloads
    cluster_endpoint: p.Output[str]
    kubeconfig_saved: p.Output[bool]


def deploy(component_config: ComponentConfig, manifests_yaml: str) -> Deployment:
    # Credentials come from OVH_ENDPOINT, OVH_APPLICATION_KEY, OVH_APPLICATION_SECRET
    # and OVH_CONSUMER_KEY
    ovh_provider = ovh.Provider('ovhcloud-provider')

    network = PrivateNetwork('trustgraph', component_config, ovh_provider)
    cluster = KubeCluster('trustgraph', component_config, network, ovh_provider)
    k8s_provider = cluster.k8s_provider()

    kubeconfig_saved = save_kubeconfig(cluster.kubeconfig, component_config.kubeconfig_path)

    workloads = create_workloads(component_config, manifests_yaml, k8s_provider)

    cluster_endpoint = cluster.cluster.kubeconfig.apply(parse_cluster_endpoint)

    return Deployment(
        network=network,
        cluster=cluster,
        k8s_provider=k8s_provider,
        workloads=workloads,
        cluster_endpoint=cluster_endpoint,
        kubeconfig_saved=kubeconfig_saved,
    )


def main():
    component_config = load_config(p.Config())

    try:
        manifests_yaml = read_manifests(component_config.manifest_path)
    except OSError as e:
        p.log.error(f'Failed to read manifests from {component_config.manifest_path}: {e}')
        raise

    deployment = deploy(component_config, manifests_yaml)

    p.export('clusterId', deployment.cluster.cluster_id)
    p.export('clusterEndpoint', deployment.cluster_endpoint)
    p.export('aiUrl', component_config.ai_url)
    p.export('networkId', deployment.network.network_id)
    # Consumed by other stacks through a StackReference
    p.export('kubeconfig', deployment.cluster.kubeconfig)
