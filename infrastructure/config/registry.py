from pydantic import BaseModel

from .models import FileSourceConfig, HttpSourceConfig, SourceKind, StaticSourceConfig

# Source kind -> settings block model
# Add future sources here
SOURCE_CONFIG_BY_KIND: dict[SourceKind, type[BaseModel]] = {
    SourceKind.FILE: FileSourceConfig,
    SourceKind.HTTP: HttpSourceConfig,
    SourceKind.STATIC: StaticSourceConfig,
}
