"""FastAPI dependency injection for optimizer services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from cutplan.application.config import OptimizerConfiguration
from cutplan.infrastructure.xml_parser import ProjectXmlParser


@lru_cache(maxsize=1)
def get_base_config() -> OptimizerConfiguration:
    """Get the cached default configuration that requests override."""
    return OptimizerConfiguration(schema_version="1.0")


def get_xml_parser() -> ProjectXmlParser:
    """Dependency for ProjectXmlParser."""
    return ProjectXmlParser()


# Type aliases for cleaner endpoint signatures
BaseConfigDep = Annotated[OptimizerConfiguration, Depends(get_base_config)]
XmlParserDep = Annotated[ProjectXmlParser, Depends(get_xml_parser)]
