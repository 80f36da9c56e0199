"""Pod inventory models."""

from pydantic import BaseModel, Field


class ContainerInfo(BaseModel):
    """One container of a pod and the image it runs."""

    name: str
    image: str = ""


class PodInfo(BaseModel):
    """Pod record as returned by the cluster query service."""

    namespace: str
    name: str
    containers: list[ContainerInfo] = Field(default_factory=list)
