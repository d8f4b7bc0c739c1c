"""TrustGraph deployment on an OVHcloud managed Kubernetes cluster"""
