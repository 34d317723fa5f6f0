from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from html_tg.config import ParserConfig


class Settings(BaseSettings):
    if Path('.env').exists():
        model_config = SettingsConfigDict(
            env_prefix='HTML_TG_', env_file='.env', env_file_encoding='utf-8', extra='ignore'
        )
    else:
        model_config = SettingsConfigDict(env_prefix='HTML_TG_')

    # Editor renders custom emoji natively (no <img> placeholder rewriting)
    custom_emoji_supported: bool = True

    custom_emoji_prefix: str = 'customEmoji:'

    # Logging level
    logging_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = 'WARNING'

    def parser_config(self) -> ParserConfig:
        return ParserConfig(
            custom_emoji_supported=self.custom_emoji_supported,
            custom_emoji_prefix=self.custom_emoji_prefix,
        )
