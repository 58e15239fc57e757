"""Runtime configuration resolved from the environment."""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from attrtree.models import SettingsModel

DEFAULT_PLUGINS_GROUP = 'attrtree_plugins'


class Settings(SettingsModel):
    """Settings controlling plugin discovery.

    Values are read from environment variables prefixed with `ATTRTREE_`,
    for example `ATTRTREE_STRICT=1`.
    """

    model_config = SettingsConfigDict(
        env_prefix='ATTRTREE_',
        frozen=True,
        extra='ignore',
    )

    strict: bool = Field(
        default=False,
        title='Strict mode',
        description=(
            'Raise errors instead of emitting warnings when a plugin '
            'can not be loaded or shadows an already registered plugin.'
        ),
    )

    plugins_group: str = Field(
        default=DEFAULT_PLUGINS_GROUP,
        title='Entry point group',
        description='Entry point group scanned for third-party plugins.',
    )

    load_plugins: bool = Field(
        default=True,
        title='Discover plugins',
        description='Whether third-party plugins are discovered via entry points.',
    )
