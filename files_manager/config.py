"""Configuration settings for the Files Manager server."""

import os


FOLDER_PATH = os.environ.get("FOLDER_PATH", "/tmp/files_manager")

DATABASE_PATH = os.environ.get("FILES_DATABASE_PATH", "./data/metadata.db")

FILES_API_HOST = os.environ.get("FILES_API_HOST", "0.0.0.0")

FILES_API_PORT = int(os.environ.get("FILES_API_PORT", "5000"))

FILE_QUEUE_NAME = os.environ.get("FILE_QUEUE_NAME", "fileQueue")
