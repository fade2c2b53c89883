"""Configuration constants for task management functionality."""

import os

# Storage Configuration
DEFAULT_DATABASE_PATH = os.environ.get(
    "VOICE_TASKS_DB", os.path.expanduser("~/.voice-tasks/tasks.db")
)
DEFAULT_WAL_MODE = True

# Database Schema Version
SCHEMA_VERSION = 1

# MCP Server Configuration
DEFAULT_MCP_HOST = "localhost"
DEFAULT_MCP_PORT = 3000
DEFAULT_MCP_SERVER_NAME = "voice-tasks"

# Transcript Capture
DEFAULT_STRIP_SPOKEN_PREFIXES = False
DEFAULT_DROP_FILLER_WORDS = False

# Task Identifiers
TASK_ID_SUFFIX_LENGTH = 8  # hex characters of randomness after the timestamp
