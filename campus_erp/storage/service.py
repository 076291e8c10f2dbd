import os
import logging
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from botocore.config import Config  # Import Config for timeout settings
from fastapi import Request

from campus_erp.config.settings import Settings
from campus_erp.errors import DependencyFailure

logger = logging.getLogger(__name__)


class ObjectStorage:
    """Service for publishing uploaded files to an S3 bucket"""

    def __init__(self, s3_client, bucket: str, region: str):
        self.s3 = s3_client
        self.bucket = bucket
        self.region = region

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStorage":
        boto3_config = Config(
            region_name=settings.AWS_REGION,
            retries={'max_attempts': settings.AWS_MAX_ATTEMPTS, 'mode': 'adaptive'},
            read_timeout=settings.AWS_READ_TIMEOUT,
            connect_timeout=settings.AWS_CONNECT_TIMEOUT,
        )

        # Check if running in AWS Lambda environment
        is_lambda_env = os.getenv('AWS_LAMBDA_FUNCTION_NAME') is not None
        if not is_lambda_env and settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            s3 = boto3.client(
                's3',
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                config=boto3_config
            )
        else:
            s3 = boto3.client('s3', config=boto3_config)

        logger.info(f"S3 client initialized successfully. Bucket: {settings.PHOTO_BUCKET}")
        return cls(s3, bucket=settings.PHOTO_BUCKET, region=settings.AWS_REGION)

    def close(self) -> None:
        self.s3.close()

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload `data` under `key` with a public-read ACL.

        Returns:
            str: Public URL of the stored object
        """
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ACL='public-read',
            )
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code')
            error_message = e.response.get('Error', {}).get('Message')
            raise DependencyFailure("Upload failed.", f"{error_code} - {error_message}") from e
        except BotoCoreError as e:
            raise DependencyFailure("Upload failed.", str(e)) from e

        logger.info(f"Uploaded s3://{self.bucket}/{key} ({len(data)} bytes)")
        return self.public_url(key)


def get_object_storage(request: Request) -> ObjectStorage:
    """FastAPI dependency provider for the object storage service."""
    return request.app.state.object_storage
