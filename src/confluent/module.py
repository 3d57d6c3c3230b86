from injector import Module, provider, singleton
from kubernetes import client, config
import os

from kubernetes.config import ConfigException
from loguru import logger
from kubernetes.client import ApiClient

from src.confluent.client import ConfluentClient, Credentials, DEFAULT_API_URL


class ConfluentModule(Module):
    """Dependency injection module for the Kubernetes and Confluent Cloud clients."""

    @provider
    @singleton
    def get_kube_client(self) -> ApiClient:
        """Get a Kubernetes API client, used to install the CRDs."""
        logger.debug("Loading Kubernetes configuration")
        try:
            logger.debug("Loading in-cluster Kubernetes configuration")
            config.load_incluster_config()
            return client.ApiClient()
        except ConfigException:
            pass

        logger.trace(f"Loading kubeconfig from {os.getenv('KUBECONFIG')}")
        config.load_kube_config(os.getenv("KUBECONFIG"))

        return client.ApiClient()

    @provider
    @singleton
    def get_credentials(self) -> Credentials:
        """Read the Confluent Cloud credential pair from the environment."""
        key = os.getenv("CONFLUENT_CLOUD_API_KEY", "")
        secret = os.getenv("CONFLUENT_CLOUD_API_SECRET", "")
        if not key or not secret:
            raise ValueError("CONFLUENT_CLOUD_API_KEY and CONFLUENT_CLOUD_API_SECRET must be set")

        logger.info(f"Using Confluent Cloud API key {key}")
        return Credentials(key=key, secret=secret)

    @provider
    @singleton
    def get_confluent_client(self, credentials: Credentials) -> ConfluentClient:
        base_url = os.getenv("CONFLUENT_CLOUD_API_URL", DEFAULT_API_URL)
        logger.debug(f"Confluent Cloud API url: {base_url}")
        return ConfluentClient(credentials, base_url=base_url)
