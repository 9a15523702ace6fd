from typing import Any, Mapping, Optional

from .logger import get_logger

logger = get_logger(__name__).bind(layer="repository")


class RemoteRepository:
    """Base for repositories whose storage is a REST resource on the store backend."""

    resource: str = ""

    def __init__(self, client):
        self.client = client
        self.logger = logger.bind(repository=type(self).__name__)

    def path(self, *parts: Any) -> str:
        segments = [self.resource.strip("/")] + [str(p).strip("/") for p in parts]
        return "/" + "/".join(s for s in segments if s)

    def get(self, *parts: Any, query: Optional[Mapping[str, Any]] = None) -> Any:
        return self.client.get_json(self.path(*parts), query=query)

    def post(self, *parts: Any, body: Any = None) -> Any:
        return self.client.post_json(self.path(*parts), body=body)

    def put(self, *parts: Any, body: Any = None) -> Any:
        return self.client.put_json(self.path(*parts), body=body)

    def delete(self, *parts: Any, query: Optional[Mapping[str, Any]] = None) -> Any:
        return self.client.delete_json(self.path(*parts), query=query)
