import logging
import os
import uuid

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from hospital import config


logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = [
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/gif",
    "image/svg+xml",
    "image/avif",
]


class StorageError(Exception):
    pass


def get_storage_client():
    """Create an S3 client for the configured bucket endpoint."""
    return boto3.client(
        "s3",
        endpoint_url=config.STORAGE_ENDPOINT_URL,
        aws_access_key_id=config.STORAGE_ACCESS_KEY_ID,
        aws_secret_access_key=config.STORAGE_SECRET_ACCESS_KEY,
        config=Config(signature_version="s3v4"),
    )


def upload_image(data: bytes, filename: str, content_type: str, folder: str) -> str:
    """Store an image under ``folder/`` and return its public URL."""
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise StorageError(f"Unsupported image type: {content_type}")
    if not (config.STORAGE_ACCESS_KEY_ID and config.STORAGE_SECRET_ACCESS_KEY and config.STORAGE_PUBLIC_URL):
        raise StorageError("Image storage not configured")

    extension = os.path.splitext(filename or "")[1].lower() or ".jpg"
    key = f"{folder}/{uuid.uuid4().hex}{extension}"
    try:
        get_storage_client().put_object(
            Bucket=config.STORAGE_BUCKET,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Image upload failed for {key}: {e}")
        raise StorageError("Image upload failed") from e

    logger.info(f"Uploaded image {key}")
    return f"{config.STORAGE_PUBLIC_URL.rstrip('/')}/{key}"
