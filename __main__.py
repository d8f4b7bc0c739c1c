"""TrustGraph on OVHcloud managed Kubernetes"""

from trustgraph_ovh.main import main

main()
