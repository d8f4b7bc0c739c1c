import enum
import typing as t

import pydantic

PROJECT = 'trustgraph'
DEFAULT_AI_ENDPOINTS_TOKEN = 'YOUR_AI_ENDPOINTS_TOKEN'

# Keys without which no resource can be declared, checked in this order.
REQUIRED_KEYS = ('environment', 'region', 'service-name', 'ai-model', 'ai-endpoint')


def _to_kebap_case(name: str) -> str:
    return name.replace('_', '-')


class LocalBaseModel(pydantic.BaseModel):
    model_config = {
        'extra': 'forbid',
        'alias_generator': _to_kebap_case,
        # Allow instanciation also with original names
        'populate_by_name': True,
    }


class ConfigStore(t.Protocol):
    """Anything that hands out raw configuration values by key, e.g. `pulumi.Config`."""

    def get(self, key: str) -> t.Any: ...


class MissingRequiredKeyError(ValueError):
    def __init__(self, key: str):
        super().__init__(f'Missing required configuration key: {key}')
        self.key = key


class AiUrlStyle(enum.StrEnum):
    # https://<ai-endpoint>/api/openai_compat/v1
    OPENAI_COMPAT = 'openai-compat'
    # https://<ai-model>.endpoints.kepler.ai.cloud.ovh.net
    MODEL_HOST = 'model-host'


class ComponentConfig(LocalBaseModel):
    model_config = {'frozen': True}

    # Something like live, dev, ref etc.
    environment: str
    # OVHcloud region like GRA11, BHS5, WAW1
    region: str
    # OVHcloud public cloud project id
    service_name: str

    # OVHcloud flavor names: b2-7, b2-15, b2-30, b2-60, b2-120, etc.
    node_size: str = 'b2-15'
    # A node pool needs at least one node, 0 is rejected rather than replaced by the default
    node_count: int = pydantic.Field(default=2, ge=1)
    kubernetes_version: str = '1.31'

    ai_model: str
    ai_endpoint: str
    # Get this from https://endpoints.ai.cloud.ovh.net/
    ai_endpoints_token: pydantic.SecretStr = pydantic.SecretStr(DEFAULT_AI_ENDPOINTS_TOKEN)
    ai_url_style: AiUrlStyle = AiUrlStyle.OPENAI_COMPAT

    private_network_routing: bool = False
    service_account: bool = True
    s3_credentials: bool = False

    manifest_path: str = '../resources.yaml'
    kubeconfig_path: str = 'kube.cfg'

    @pydantic.model_validator(mode='after')
    def _check_s3_credentials(self) -> t.Self:
        if self.s3_credentials and not self.service_account:
            raise ValueError('s3-credentials requires service-account')
        return self

    @property
    def prefix(self) -> str:
        return f'{PROJECT}-{self.environment}'

    @property
    def tags(self) -> dict[str, str]:
        return {'environment': self.environment, 'project': PROJECT}

    @property
    def tags_sep(self) -> str:
        return ','.join(f'{key}={value}' for key, value in self.tags.items())

    @property
    def ai_url(self) -> str:
        if self.ai_url_style == AiUrlStyle.MODEL_HOST:
            return f'https://{self.ai_model}.endpoints.kepler.ai.cloud.ovh.net'
        return f'https://{self.ai_endpoint}/api/openai_compat/v1'


def load_config(store: ConfigStore) -> ComponentConfig:
    """
    Read the stack configuration from `store`.

    All required keys are checked before anything else is parsed, so a
    missing key always surfaces as `MissingRequiredKeyError` naming it.
    Empty values count as absent, which makes optional keys fall back to
    their defaults.
    """
    for key in REQUIRED_KEYS:
        if store.get(key) in (None, ''):
            raise MissingRequiredKeyError(key)

    values = {}
    for name in ComponentConfig.model_fields:
        key = _to_kebap_case(name)
        value = store.get(key)
        if value not in (None, ''):
            values[key] = value

    return ComponentConfig.model_validate(values)
