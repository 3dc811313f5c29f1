"""Translate a build configuration into native-image arguments."""

from typing import List

from ..models.config import BuildConfiguration
from ..services.exceptions import ConfigurationError
from ..utils.paths import format_to_unix

# (toggle, flag) pairs emitted in this order when enabled
LEADING_FLAGS = [
    ("enable_no_fallback", "--no-fallback"),
    ("enable_allow_incomplete_classpath", "--allow-incomplete-classpath"),
    ("enable_install_exit_handlers", "--install-exit-handlers"),
    ("enable_http", "--enable-http"),
    ("enable_https", "--enable-https"),
    ("enable_verbose", "--verbose"),
    ("enable_auto_fallback", "--auto-fallback"),
    ("enable_force_fallback", "--force-fallback"),
    ("enable_all_security_services", "--enable-all-security-services"),
    ("enable_shared", "--shared"),
    ("enable_static", "--static"),
    ("enable_add_all_charsets", "-H:+AddAllCharsets"),
]

TRAILING_FLAGS = [
    ("enable_remove_saturated_type_flows", "-H:+RemoveSaturatedTypeFlows"),
    ("enable_report_exception_stack_traces", "-H:+ReportExceptionStackTraces"),
    ("enable_print_analysis_call_tree", "-H:+PrintAnalysisCallTree"),
    ("enable_check_toolchain", "-H:-CheckToolchain"),
    ("enable_report_unsupported_elements_at_runtime", "-H:+ReportUnsupportedElementsAtRuntime"),
]


def translate_arguments(config: BuildConfiguration) -> List[str]:
    """Convert a configuration into an ordered list of native-image tokens.

    The order is fixed: free-text build options, leading boolean flags,
    class initialization lists, system properties, configuration files,
    features, class initialization tracing and the trailing diagnostic flags.
    HTTP and HTTPS support are on unless disabled, so an empty configuration
    yields ``["--enable-http", "--enable-https"]``.
    """
    args: List[str] = []

    if config.build_options:
        args.extend(config.build_options.split())

    _add_flags(args, config, LEADING_FLAGS)

    _add_list(args, config.get_list("initialize_at_build_time"), "--initialize-at-build-time")
    _add_list(args, config.get_list("initialize_at_run_time"), "--initialize-at-run-time")

    for prop in config.get_list("system_property"):
        args.append(f"-D{prop}")

    if config.reflection_config is not None:
        args.append(f"-H:ReflectionConfigurationFiles={format_to_unix(config.reflection_config)}")
    if config.serialization_config is not None:
        args.append(f"-H:SerializationConfigurationResources={config.serialization_config}")
    if config.jni_configuration_files is not None:
        args.append(f"-H:JNIConfigurationFiles={config.jni_configuration_files}")
    if config.resource_configuration_files is not None:
        args.append(f"-H:ResourceConfigurationFiles={config.resource_configuration_files}")

    if config.features is not None:
        args.append(f"--features={config.features}")

    if config.trace_class_initialization is not None:
        args.append(f"--trace-class-initialization={config.trace_class_initialization}")

    _add_flags(args, config, TRAILING_FLAGS)

    return args


def local_build_arguments(
    config: BuildConfiguration, classpath: str, default_name: str
) -> List[str]:
    """Arguments for invoking native-image directly on the host.

    The executable name falls back to ``default_name`` and the main class is
    always the last token.

    Raises:
        ConfigurationError: If no main class is configured
    """
    if not config.main_class_name:
        raise ConfigurationError("mainClassName must be specified")

    args = translate_arguments(config)
    args.append(f"-H:Name={config.output_file_name or default_name}")
    args.extend(["-cp", classpath])
    args.append(config.main_class_name)
    return args


def container_build_arguments(config: BuildConfiguration, classpath: str) -> List[str]:
    """Arguments for the ``RUN native-image`` line of a generated Dockerfile.

    The main class is not included; the Dockerfile generator appends it.
    """
    args = translate_arguments(config)
    if config.output_file_name:
        args.append(f"-H:Name={config.output_file_name}")
    if classpath:
        args.extend(["-cp", classpath])
    return args


def _add_flags(args: List[str], config: BuildConfiguration, flags) -> None:
    for toggle, flag in flags:
        if config.is_enabled(toggle):
            args.append(flag)


def _add_list(args: List[str], values: List[str], flag: str) -> None:
    if values:
        args.append(f"{flag}={','.join(values)}")
