"""Typed resource classes, one per API area."""

from src.client.resources.backup import BackupResource
from src.client.resources.chapters import ChaptersResource
from src.client.resources.chat import ChatResource
from src.client.resources.device import DeviceResource
from src.client.resources.graph import GraphResource
from src.client.resources.health import HealthResource
from src.client.resources.model_configs import ModelConfigsResource
from src.client.resources.projects import ProjectsResource
from src.client.resources.review import ReviewResource
from src.client.resources.writing import ASSIST_PATH, WritingResource

__all__ = [
    "ASSIST_PATH",
    "BackupResource",
    "ChaptersResource",
    "ChatResource",
    "DeviceResource",
    "GraphResource",
    "HealthResource",
    "ModelConfigsResource",
    "ProjectsResource",
    "ReviewResource",
    "WritingResource",
]
