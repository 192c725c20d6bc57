"""
Celery configuration settings.

Broker connection and serializer settings for the housekeeping worker.
Housekeeping results are not stored, so no result backend is configured.

Dependencies: pydantic, pydantic_settings
System role: Task queue configuration for scheduled retention
"""

from pydantic import Field

from batchstatus.configs.base import BaseSettings, settings_config


class CelerySettings(BaseSettings):
    """Celery and RabbitMQ configuration."""

    model_config = settings_config("CELERY_")

    broker_host: str = Field(default="localhost", description="RabbitMQ host")
    broker_port: int = Field(default=5672, description="RabbitMQ port")
    broker_user: str = Field(default="guest", description="RabbitMQ user")
    broker_password: str = Field(default="guest", description="RabbitMQ password")
    broker_vhost: str = Field(default="/", description="RabbitMQ virtual host")

    task_serializer: str = Field(default="json", description="Task serialization format")
    accept_content: list[str] = Field(
        default=["json"],
        description="Accepted content types",
    )
    timezone: str = Field(default="UTC", description="Celery timezone")

    @property
    def broker_url(self) -> str:
        """
        Construct RabbitMQ broker URL.

        Returns:
            str: Celery-compatible broker URL
        """
        return (
            f"amqp://{self.broker_user}:{self.broker_password}"
            f"@{self.broker_host}:{self.broker_port}/{self.broker_vhost}"
        )
