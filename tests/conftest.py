"""Test environment. Settings are read at import time, so this runs before any app import."""

import os

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-chars"
os.environ["JWT_EXPIRE_MINUTES"] = "60"
# Lowest cost bcrypt accepts; production default is 12.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
