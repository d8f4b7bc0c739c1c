"""
Shared fixtures.

- mocks: Pulumi resource mocks recording every registered resource by name
- config_values: raw stack configuration of the test stack
- component_config: the loaded configuration
"""

import json
import typing as t

import pulumi as p
import pytest
from pulumi.runtime import rpc

from trustgraph_ovh.config import ComponentConfig, load_config

MANIFESTS = """
apiVersion: v1
kind: Namespace
metadata:
  name: trustgraph
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: trustgraph-config
  namespace: trustgraph
data:
  config: "test"
"""

KUBECONFIG = json.dumps(
    {
        'apiVersion': 'v1',
        'kind': 'Config',
        'clusters': [
            {
                'cluster': {
                    'server': 'https://mock-cluster.ovh.net',
                    'certificate-authority-data': 'mock-cert',
                },
                'name': 'mock-cluster',
            }
        ],
        'contexts': [
            {
                'context': {'cluster': 'mock-cluster', 'user': 'mock-user'},
                'name': 'mock-context',
            }
        ],
        'current-context': 'mock-context',
        'users': [{'name': 'mock-user', 'user': {'token': 'mock-token'}}],
    }
)


def reveal(value: t.Any) -> t.Any:
    """Strips the secret markers from deserialized resource inputs."""
    value = rpc.unwrap_rpc_secret(value)
    if isinstance(value, dict):
        return {key: reveal(item) for key, item in value.items()}
    if isinstance(value, list):
        return [reveal(item) for item in value]
    return value


class RecordedResource(t.NamedTuple):
    typ: str
    name: str
    inputs: dict[str, t.Any]


class TrustgraphMocks(p.runtime.Mocks):
    def __init__(self):
        self.resources: dict[str, RecordedResource] = {}

    def new_resource(self, args: p.runtime.MockResourceArgs):
        self.resources[args.name] = RecordedResource(args.typ, args.name, reveal(args.inputs))

        outputs = dict(args.inputs)
        kind = args.typ.split(':')[-1]
        if kind == 'Kube':
            outputs['kubeconfig'] = KUBECONFIG
        elif kind == 'User':
            outputs['username'] = 'mock-user'
            outputs['password'] = 'mock-password'

        return f'{args.name}_id', outputs

    def call(self, args: p.runtime.MockCallArgs):
        return {}


@pytest.fixture
def mocks() -> TrustgraphMocks:
    mocks = TrustgraphMocks()
    p.runtime.set_mocks(mocks, preview=False)
    return mocks


@pytest.fixture
def config_values(tmp_path) -> dict[str, str]:
    return {
        'environment': 'test',
        'region': 'GRA11',
        'service-name': 'mock-service-id',
        'ai-model': 'mistral-nemo-instruct-2407',
        'ai-endpoint': 'mistral-nemo-instruct-2407.endpoints.kepler.ai.cloud.ovh.net',
        'ai-endpoints-token': 'mock-token',
        'kubeconfig-path': str(tmp_path / 'kube.cfg'),
    }


@pytest.fixture
def component_config(config_values) -> ComponentConfig:
    return load_config(config_values)
