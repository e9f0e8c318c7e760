"""Maven AGI destination: client, transformer and uploader."""

from .client import MavenClient
from .transform import transform_to_maven_format
from .uploader import MavenUploader

__all__ = ["MavenClient", "MavenUploader", "transform_to_maven_format"]
