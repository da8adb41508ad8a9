"""ezpresso scaffolder -- project bootstrap and artifact generation.

Quick usage::

    from ezpresso.config import Config
    from ezpresso.scaffolder import ArtifactGenerator, ProjectBootstrapper

    config = Config()
    result = await ProjectBootstrapper(config).bootstrap(
        Path("my-api"), ManifestData(name="my-api")
    )
    await ArtifactGenerator(config).generate_many(
        Path("my-api"), "user", GENERATABLE_KINDS
    )
"""

from ezpresso.scaffolder.bootstrap import BootstrapResult, ProjectBootstrapper
from ezpresso.scaffolder.context import build_context
from ezpresso.scaffolder.fields import parse_fields, parse_fields_with_diagnostics
from ezpresso.scaffolder.generator import ArtifactGenerator
from ezpresso.scaffolder.templates import TemplateRenderer, TemplateResolver

__all__ = [
    "ArtifactGenerator",
    "BootstrapResult",
    "ProjectBootstrapper",
    "TemplateRenderer",
    "TemplateResolver",
    "build_context",
    "parse_fields",
    "parse_fields_with_diagnostics",
]
