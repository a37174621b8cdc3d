"""
Infrastructure adapter: AWS Secrets Manager -> ISecretStore.

load_into_env() is called once at AgentCore container startup (before any SDK
that reads LANGFUSE_* or BEDROCK_* env vars is imported) so secrets are
available process-wide.
"""

import json
import logging
import os

import boto3

from src.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None) -> None:
        self._client = boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_arn: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN."""
        response = self._client.get_secret_value(SecretId=secret_arn)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_arn: str) -> None:
        """Inject all key-value pairs of a JSON secret into os.environ.

        Existing variables are overwritten so the secret is the source of truth
        inside the container.
        """
        secrets = self.get_secret(secret_arn)
        for key, value in secrets.items():
            os.environ[key] = str(value)
        logger.info("Loaded %d secret values into the environment", len(secrets))
