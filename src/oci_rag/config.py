"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # OCI authentication
    oci_config_file: str = Field(default="~/.oci/config", description="Path to the OCI SDK config file")
    oci_profile: str = Field(default="DEFAULT", description="Profile name inside the OCI config file")
    oci_genai_endpoint: str = Field(
        default="",
        description=(
            "Generative AI inference endpoint. Leave empty to use the endpoint "
            "of the config file's region, e.g. "
            "'https://inference.generativeai.us-chicago-1.oci.oraclecloud.com'"
        ),
    )
    oci_compartment: str = Field(default="", description="Compartment OCID used for GenAI requests")

    # Models
    oci_chat_model_id: str = Field(default="", description="Chat model id or dedicated endpoint OCID")
    oci_embedding_model_id: str = Field(default="", description="Embedding model id or dedicated endpoint OCID")
    inference_request_type: str = Field(default="COHERE", description="COHERE or LLAMA request format")

    # Object storage
    oci_namespace: str = ""
    oci_bucket_name: str = ""
    oci_object_prefix: str = ""

    # Oracle Database
    db_user: str = "testuser"
    db_password: str = ""
    db_dsn: str = "localhost:1521/FREEPDB1"
    vector_table: str = "vector_store"
    # OCI embedding models produce 1024 dimensional vectors.
    vector_dimensions: int = 1024

    # Retrieval
    min_score: float = Field(default=0.7, ge=0.0, le=1.0)
    max_results: int = Field(default=5, ge=1)

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Module-level singleton; import `settings` wherever needed.
settings = Settings()
