"""
Configuration for the linkage pipeline
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pipeline settings"""

    # NDK layout
    NDK_ROOT: str = "prebuilts/ndk/current"
    PROFILE_ID: str = "ndk-current"

    # Report output; None keeps reports in memory only
    REPORT_DIR: str | None = None

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
