"""
Resolve the AWS session used by the Lambda client.

An explicit profile or region overrides what boto3 would otherwise infer from
the environment (``AWS_PROFILE``, ``AWS_REGION`` / ``AWS_DEFAULT_REGION``) and
the shared config files.
"""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, NoRegionError, ProfileNotFound

from aws_logs_tui.errors import ConfigurationError


def load_config(profile: Optional[str] = None, region: Optional[str] = None) -> boto3.Session:
    kwargs = {}
    if profile:
        kwargs["profile_name"] = profile
    if region:
        kwargs["region_name"] = region
    try:
        return boto3.Session(**kwargs)
    except ProfileNotFound as e:
        raise ConfigurationError(f"AWS profile not found: {profile}") from e
    except BotoCoreError as e:
        raise ConfigurationError(f"Failed to load AWS configuration: {e}") from e


def create_lambda_client(session: boto3.Session) -> Any:
    try:
        return session.client("lambda")
    except NoRegionError as e:
        raise ConfigurationError("No AWS region configured. Pass --region or set AWS_REGION.") from e
    except BotoCoreError as e:
        raise ConfigurationError(f"Failed to create Lambda client: {e}") from e
