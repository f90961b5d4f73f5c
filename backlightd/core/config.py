from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BACKLIGHTD_", env_file=".env", extra="ignore")

    app_name: str = "backlightd"

    # Mode: "dbus" talks to iio-sensor-proxy and logind; "sim" for development
    mode: str = Field(default="dbus")

    # Timings below are the compiled-in values; overriding them is for tests and development
    # Monitor
    poll_seconds: float = 5.0
    time_warp_seconds: float = 20.0  # several poll intervals => host was suspended

    # Actuator
    tick_seconds: float = 0.05

    # Supervisor
    restart_cooldown_seconds: float = 10.0

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Status API, off unless a port is given
    api_host: str = "127.0.0.1"
    api_port: int | None = None


settings = Settings()
