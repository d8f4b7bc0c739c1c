import pathlib

import pulumi as p
import yaml

NOT_AVAILABLE = 'Not available'


def parse_cluster_endpoint(kubeconfig: str | None) -> str:
    """
    Returns the API server URL of the first cluster in a kubeconfig.

    OVHcloud hands out the kubeconfig as YAML, JSON parses just as well.
    Anything that does not contain a server URL yields `NOT_AVAILABLE`.
    """
    if not kubeconfig:
        return NOT_AVAILABLE

    try:
        server = yaml.safe_load(kubeconfig)['clusters'][0]['cluster']['server']
    except (yaml.YAMLError, TypeError, KeyError, IndexError) as e:
        p.log.warn(f'Could not read the cluster endpoint from the kubeconfig: {e}')
        return NOT_AVAILABLE

    if not isinstance(server, str) or not server:
        return NOT_AVAILABLE

    return server


def write_kubeconfig(path: str | pathlib.Path, kubeconfig: str | None) -> bool:
    """Writes the kubeconfig for use with kubectl, returns whether a file was written."""
    if not kubeconfig:
        return False

    try:
        pathlib.Path(path).write_text(kubeconfig, encoding='utf-8')
    except OSError as e:
        p.log.error(f'Failed to write {path}: {e}')
        return False

    p.log.info(f'Wrote {path}.')
    return True


def save_kubeconfig(kubeconfig: p.Output[str], path: str | pathlib.Path) -> p.Output[bool]:
    return kubeconfig.apply(lambda config: write_kubeconfig(path, config))
