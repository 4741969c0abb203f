"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "fleet-predict"
    debug: bool = False
    log_level: str = "INFO"

    # Telemetry processing
    telemetry_latency_threshold_ms: float = 200.0
    adaptive_learning_enabled: bool = True
    history_capacity: int = 1000
    queue_batch_size: int = 10
    queue_batch_delay_ms: float = 50.0

    # Fleet insights
    fleet_issue_priority_cutoff: int = 7
    fleet_top_issues: int = 5

    # Alert sink
    alert_visual: bool = True
    alert_audio: bool = True
    alert_haptic: bool = True
    alert_threshold: float = 70.0
    alert_history_size: int = 100

    # OEM reporting (mocked)
    oem_protocol: str = "HTTPS"
    oem_version: str = "1.0"
    oem_endpoint: str = "https://api.example-oem.com/diagnostics"
    oem_simulated_latency_ms: float = 200.0

    model_config = {"env_prefix": "FLEET_"}


settings = Settings()
