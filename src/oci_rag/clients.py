"""OCI client initialisation — single place to build SDK clients.

Authentication uses the OCI SDK config file (``~/.oci/config`` by
default).  Every client in the project is built from the dict returned by
:func:`load_oci_config`, so swapping profiles or regions only requires
changing ``OCI_CONFIG_FILE`` / ``OCI_PROFILE``.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import oci
from oci.generative_ai_inference import GenerativeAiInferenceClient
from oci.generative_ai_inference.models import (
    DedicatedServingMode,
    OnDemandServingMode,
    ServingMode,
)
from oci.object_storage import ObjectStorageClient

from oci_rag.config import settings

logger = logging.getLogger(__name__)

_DEDICATED_ENDPOINT_PREFIX = "ocid1.generativeaiendpoint"


def load_oci_config(config_file: str | None = None, profile: str | None = None) -> dict[str, Any]:
    """Read and validate the OCI SDK config file."""
    config_file = os.path.expanduser(config_file or settings.oci_config_file)
    profile = profile or settings.oci_profile
    config = oci.config.from_file(file_location=config_file, profile_name=profile)
    oci.config.validate_config(config)
    logger.debug("Loaded OCI config profile %s from %s", profile, config_file)
    return config


def get_genai_client(config: dict[str, Any] | None = None) -> GenerativeAiInferenceClient:
    """Return a Generative AI inference client.

    When ``settings.oci_genai_endpoint`` is set the client targets that
    endpoint instead of the one derived from the config's region.
    """
    config = config if config is not None else load_oci_config()
    kwargs: dict[str, Any] = {}
    if settings.oci_genai_endpoint:
        logger.info("Using GenAI endpoint: %s", settings.oci_genai_endpoint)
        kwargs["service_endpoint"] = settings.oci_genai_endpoint
    return GenerativeAiInferenceClient(config, **kwargs)


def get_object_storage_client(config: dict[str, Any] | None = None) -> ObjectStorageClient:
    """Return an Object Storage client for the configured region."""
    config = config if config is not None else load_oci_config()
    return ObjectStorageClient(config)


def serving_mode_for(model_id: str) -> ServingMode:
    """Pick the serving mode that hosts *model_id*.

    Dedicated AI cluster endpoints are addressed by their endpoint OCID;
    anything else is treated as an on-demand model id or model OCID.
    """
    if not model_id:
        raise ValueError("A model id is required to build a serving mode")
    if model_id.startswith(_DEDICATED_ENDPOINT_PREFIX):
        return DedicatedServingMode(endpoint_id=model_id)
    return OnDemandServingMode(model_id=model_id)
