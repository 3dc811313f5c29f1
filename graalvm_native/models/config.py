"""Build configuration model."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..core.constants import (
    DEFAULT_IMAGE_VERSION,
    DEFAULT_JAVA_VERSION,
    DEFAULT_OUTPUT_IMAGE_TAG,
)
from .build import BuildStrategy
from .platform import Platform

# Toggles that are on unless explicitly disabled
DEFAULT_ENABLED_FLAGS = frozenset({"enable_http", "enable_https"})


class BuildConfiguration(BaseModel):
    """User-declared settings for one native-image build.

    Every option is optional; ``None`` means the user did not set it.
    Defaults are applied by the accessor methods when the value is read,
    so an instance always reflects exactly what was declared.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    # Distribution
    java_version: Optional[str] = None
    image_version: Optional[str] = None
    image_file: Optional[str] = None
    platform: Optional[str] = None

    # Application
    main_class_name: Optional[str] = None
    output_file_name: Optional[str] = None
    output_image_tag: Optional[str] = None
    add_classpath: Optional[str] = None

    # Compiler options
    features: Optional[str] = None
    build_options: Optional[str] = None
    reflection_config: Optional[str] = None
    serialization_config: Optional[str] = None
    jni_configuration_files: Optional[str] = None
    resource_configuration_files: Optional[str] = None
    initialize_at_build_time: Optional[List[str]] = None
    initialize_at_run_time: Optional[List[str]] = None
    system_property: Optional[List[str]] = None
    trace_class_initialization: Optional[str] = None

    enable_add_all_charsets: Optional[bool] = None
    enable_allow_incomplete_classpath: Optional[bool] = None
    enable_all_security_services: Optional[bool] = None
    enable_auto_fallback: Optional[bool] = None
    enable_check_toolchain: Optional[bool] = None
    enable_force_fallback: Optional[bool] = None
    enable_http: Optional[bool] = None
    enable_https: Optional[bool] = None
    enable_install_exit_handlers: Optional[bool] = None
    enable_no_fallback: Optional[bool] = None
    enable_print_analysis_call_tree: Optional[bool] = None
    enable_remove_saturated_type_flows: Optional[bool] = None
    enable_report_exception_stack_traces: Optional[bool] = None
    enable_report_unsupported_elements_at_runtime: Optional[bool] = None
    enable_shared: Optional[bool] = None
    enable_static: Optional[bool] = None
    enable_verbose: Optional[bool] = None

    # Container
    docker_image: Optional[str] = None
    docker_file: Optional[str] = None

    @field_validator(
        "initialize_at_build_time",
        "initialize_at_run_time",
        "system_property",
        mode="before",
    )
    @classmethod
    def _split_comma_string(cls, value: Any) -> Any:
        """Accept "a,b" as shorthand for ["a", "b"]."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    def is_enabled(self, flag: str) -> bool:
        """Return the value of a boolean toggle with its default applied."""
        value = getattr(self, flag)
        if value is None:
            return flag in DEFAULT_ENABLED_FLAGS
        return value

    def get_list(self, name: str) -> List[str]:
        """Return a list option, empty when unset."""
        return list(getattr(self, name) or [])

    def get_java_version(self) -> str:
        return self.java_version or DEFAULT_JAVA_VERSION

    def get_image_version(self) -> str:
        return self.image_version or DEFAULT_IMAGE_VERSION

    def get_output_image_tag(self) -> str:
        return self.output_image_tag or DEFAULT_OUTPUT_IMAGE_TAG

    def get_platform(self) -> Platform:
        """Return the platform override, or detect the host platform."""
        if self.platform:
            return Platform.from_suffix(self.platform)
        return Platform.detect()

    def get_extra_classpath(self) -> List[str]:
        """Return the comma-separated extra classpath entries."""
        if not self.add_classpath:
            return []
        return [entry.strip() for entry in self.add_classpath.split(",") if entry.strip()]

    @property
    def is_configured(self) -> bool:
        """Whether a main class was declared; without one the build is skipped."""
        return bool(self.main_class_name)

    @property
    def strategy(self) -> BuildStrategy:
        """Select the execution strategy.

        A user Dockerfile takes precedence over a base image; with neither
        the build runs on the host.
        """
        if self.docker_file:
            return BuildStrategy.CONTAINER_FROM_DOCKERFILE
        if self.docker_image:
            return BuildStrategy.CONTAINER_FROM_BASE_IMAGE
        return BuildStrategy.LOCAL

    def merged(self, **overrides: Any) -> "BuildConfiguration":
        """Return a new configuration with the non-None overrides applied."""
        data = self.model_dump(exclude_none=True)
        data.update({key: value for key, value in overrides.items() if value is not None})
        return type(self).model_validate(data)
