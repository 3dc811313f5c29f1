"""Constants used throughout the native-image builder."""

# Distribution defaults
DEFAULT_IMAGE_VERSION = "24.0.1"
DEFAULT_JAVA_VERSION = "java24"
GITHUB_RELEASES_URL = "https://github.com/graalvm/graalvm-ce-builds/releases/download"

# Download probing
PROBE_TIMEOUT = 5.0  # seconds
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# Build directory layout, relative to the project build directory
GRAALVM_DIR = "graalvm"
GRAALVM_JAVA_DIR = "graalvm/java"
GRAALVM_JAVA_MAIN = "graalvm/java/main"
GRAALVM_OUTPUT_DIR = "graalvm/output"
DISTRIBUTION_DIR = "graalvm/sdk"
LIBS_DIR = "libs"

# Docker-related constants
DEFAULT_OUTPUT_IMAGE_TAG = "generated-graalvm-native-plugin"
DEFAULT_WORKDIR = "/workspace"
CONTAINER_OUTPUT_DIR = "/output"
DOCKERFILE_NAME = "Dockerfile"
CONTAINER_NAME_PREFIX = "copy-file-container"
DOCKER_ENDPOINTS = [
    "unix:///var/run/docker.sock",
    "unix:///run/docker.sock",
    "unix://{home}/.docker/run/docker.sock",
    "tcp://localhost:2375",
]
DOCKER_CONNECT_TIMEOUT = 30  # seconds

# Compiler binaries
NATIVE_IMAGE = "native-image"
GU = "gu"

# Configuration files, searched in order
CONFIG_FILE_NAMES = ["native-image.yaml", "native-image.yml", "native-image.json"]
