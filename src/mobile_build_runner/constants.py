from enum import Enum

DEFAULT_CUSTOM_ARGS_PREFIX: str = "-gj.mobilebuild:"
DEFAULT_PAIR_SEPARATOR: str = ";"

DEFAULT_BUILD_DIR: str = "Build/"
DEFAULT_IOS_OUTPUT_DIR: str = DEFAULT_BUILD_DIR + "/iOS"
DEFAULT_ANDROID_APK_FILE: str = DEFAULT_BUILD_DIR + "/app.apk"


class ArgumentKey(str, Enum):
    """Names understood inside the custom argument blob."""

    OUTPUT_PATH = "outputPath"
    KEYSTORE_NAME = "keystoreName"
    KEYSTORE_PASS = "keystorePass"
    KEY_ALIAS_NAME = "keyAliasName"
    KEY_ALIAS_PASS = "keyAliasPass"


class ConfigKey(str, Enum):
    """Enum for configuration keys."""

    ARGS_PREFIX = "args_prefix"
    ARGS_SEPARATOR = "args_separator"
    LOG_LEVEL = "log_level"
    LOG_FILE = "log_file"
    STRICT = "strict"


SECRET_ARGUMENT_KEYS: frozenset[str] = frozenset(
    {ArgumentKey.KEYSTORE_PASS.value, ArgumentKey.KEY_ALIAS_PASS.value}
)
