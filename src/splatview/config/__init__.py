"""Configuration module for splatview."""

from src.splatview.config.settings import LoaderConfig


__all__ = ["LoaderConfig"]
