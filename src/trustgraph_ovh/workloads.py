import pathlib
import typing as t

import pulumi as p
import pulumi_kubernetes as k8s

from trustgraph_ovh.config import ComponentConfig

NAMESPACE = 'trustgraph'


class Workloads(t.NamedTuple):
    manifests: k8s.yaml.v2.ConfigGroup
    gateway_secret: k8s.core.v1.Secret
    ai_secret: k8s.core.v1.Secret


def read_manifests(path: str | pathlib.Path) -> str:
    return pathlib.Path(path).read_text(encoding='utf-8')


def create_workloads(
    component_config: ComponentConfig,
    manifests_yaml: str,
    k8s_provider: k8s.Provider,
) -> Workloads:
    """
    Deploy the TrustGraph manifests and the secrets they consume.
    """
    k8s_opts = p.ResourceOptions(provider=k8s_provider)

    # Objects are not awaited, the secrets below have to exist before pods become ready
    manifests = k8s.yaml.v2.ConfigGroup(
        'resources',
        yaml=manifests_yaml,
        skip_await=True,
        opts=k8s_opts,
    )

    # The namespace is part of the manifests
    secret_opts = p.ResourceOptions.merge(k8s_opts, p.ResourceOptions(depends_on=[manifests]))

    # No authentication on the gateway
    gateway_secret = k8s.core.v1.Secret(
        'gateway-secret',
        metadata={
            'name': 'gateway-secret',
            'namespace': NAMESPACE,
        },
        string_data={
            'gateway-secret': '',
        },
        opts=secret_opts,
    )

    ai_secret = k8s.core.v1.Secret(
        'ai-secret',
        metadata={
            'name': 'openai-credentials',
            'namespace': NAMESPACE,
        },
        string_data={
            'openai-token': p.Output.secret(component_config.ai_endpoints_token.get_secret_value()),
            'openai-url': component_config.ai_url,
        },
        opts=secret_opts,
    )

    return Workloads(manifests, gateway_secret, ai_secret)
