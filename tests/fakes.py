"""In-memory stand-ins for the aioboto3 S3 and Secrets Manager clients."""

import json
from datetime import datetime, timezone
from typing import Dict, List, Optional

from botocore.exceptions import ClientError

LAST_MODIFIED = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def client_error(code: str, operation: str, message: str = "boom") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeBody:
    def __init__(self, data: bytes):
        self._data = data

    async def read(self) -> bytes:
        return self._data


class FakePaginator:
    def __init__(self, client: "FakeS3Client"):
        self._client = client

    def paginate(self, **kwargs):
        self._client.list_calls.append(kwargs)
        return self._pages(kwargs["Bucket"], kwargs.get("Prefix", ""))

    async def _pages(self, bucket: str, prefix: str):
        if self._client.list_error is not None:
            raise self._client.list_error
        keys = sorted(k for k in self._client.objects if k.startswith(prefix))
        if not keys:
            yield {"KeyCount": 0}
            return
        size = self._client.page_size
        for start in range(0, len(keys), size):
            yield {
                "Contents": [
                    {
                        "Key": key,
                        "Size": len(self._client.objects[key]),
                        "LastModified": LAST_MODIFIED,
                    }
                    for key in keys[start:start + size]
                ]
            }


class FakeS3Client:
    """Single-bucket in-memory stand-in for the aioboto3 S3 client."""

    def __init__(self, objects: Optional[Dict[str, bytes]] = None, page_size: int = 1000):
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.page_size = page_size
        self.list_calls: List[dict] = []
        self.get_calls: List[str] = []
        self.put_calls: List[dict] = []
        self.list_error: Optional[Exception] = None
        self.get_errors: Dict[str, Exception] = {}
        self.put_errors: Dict[str, Exception] = {}

    def get_paginator(self, operation_name: str) -> FakePaginator:
        assert operation_name == "list_objects_v2"
        return FakePaginator(self)

    async def get_object(self, Bucket: str, Key: str):
        self.get_calls.append(Key)
        if Key in self.get_errors:
            raise self.get_errors[Key]
        if Key not in self.objects:
            raise client_error("NoSuchKey", "GetObject", "The specified key does not exist.")
        return {"Body": FakeBody(self.objects[Key])}

    async def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str):
        self.put_calls.append({"Bucket": Bucket, "Key": Key, "ContentType": ContentType})
        if Key in self.put_errors:
            raise self.put_errors[Key]
        self.objects[Key] = Body
        return {"ETag": '"etag"'}


class FakeSecretsManagerClient:
    def __init__(self, secrets: Optional[Dict[str, dict]] = None):
        self.secrets = dict(secrets or {})
        self.calls: List[str] = []

    async def get_secret_value(self, SecretId: str):
        self.calls.append(SecretId)
        if SecretId not in self.secrets:
            raise client_error(
                "ResourceNotFoundException",
                "GetSecretValue",
                "Secrets Manager can't find the specified secret.",
            )
        return self.secrets[SecretId]


def secret_payload(data: dict) -> dict:
    return {"Name": "pgp-key", "SecretString": json.dumps(data)}
