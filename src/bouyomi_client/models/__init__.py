"""Data models for talk parameters."""

from .talk_config import TalkConfig, USE_APP_SETTING
