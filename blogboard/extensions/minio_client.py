import urllib3
from threading import Lock

from flask import current_app
from minio import Minio


_client = None
_client_settings = None
_client_lock = Lock()


def _settings():
    config = current_app.config
    return (
        config["MINIO_ENDPOINT"],
        config["MINIO_ACCESS_KEY"],
        config["MINIO_SECRET_KEY"],
        config["MINIO_SECURE"],
        config["MINIO_CONNECT_TIMEOUT"],
        config["MINIO_READ_TIMEOUT"],
        config.get("MINIO_HTTP_POOL_MAXSIZE", 32),
    )


def get_minio_client():
    """Return a MinIO client for the current app config, rebuilt when the config changes."""
    global _client, _client_settings

    settings = _settings()
    with _client_lock:
        if _client is not None and _client_settings == settings:
            return _client

        endpoint, access_key, secret_key, secure, connect, read, pool_size = settings
        http_client = urllib3.PoolManager(
            timeout=urllib3.Timeout(connect=connect, read=read),
            retries=False,
            maxsize=pool_size,
        )

        _client = Minio(
            endpoint,
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
            http_client=http_client,
        )
        _client_settings = settings
        return _client


def ensure_bucket(client, bucket: str):
    if not client.bucket_exists(bucket):
        client.make_bucket(bucket)
