"""Shared API constants."""

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

MAX_MESSAGE_LENGTH = 10000
MAX_PROMPT_LENGTH = 20000
