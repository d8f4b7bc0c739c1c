import pulumi as p
import pulumi_ovh as ovh

from trustgraph_ovh.config import ComponentConfig

VLAN_ID = 0

SUBNET_NETWORK = '10.0.0.0/24'
SUBNET_START = '10.0.0.100'
SUBNET_END = '10.0.0.200'
VRACK_GATEWAY = '10.0.0.1'


class PrivateNetwork(p.ComponentResource):
    """vRack private network with a single DHCP subnet the cluster nodes live in."""

    def __init__(self, name: str, component_config: ComponentConfig, ovh_provider: ovh.Provider):
        super().__init__('trustgraph:ovh:PrivateNetwork', name)

        ovh_opts = p.ResourceOptions(provider=ovh_provider, parent=self)

        self.network = ovh.cloudproject.NetworkPrivate(
            'private-network',
            service_name=component_config.service_name,
            name=f'{component_config.prefix}-network',
            regions=[component_config.region],
            vlan_id=VLAN_ID,
            opts=ovh_opts,
        )

        # The address plan does not depend on the stack configuration
        self.subnet = ovh.cloudproject.NetworkPrivateSubnet(
            'subnet',
            service_name=component_config.service_name,
            network_id=self.network.id,
            region=component_config.region,
            start=SUBNET_START,
            end=SUBNET_END,
            network=SUBNET_NETWORK,
            dhcp=True,
            no_gateway=False,
            opts=ovh_opts,
        )

        self.network_id = self.network.id

        self.register_outputs({'network_id': self.network_id})
