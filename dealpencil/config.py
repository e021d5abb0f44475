from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: list[str] = ["*"]

    # Dashboard
    dashboard_port: int = 8050

    # Report branding
    report_title: str = "Commercial Real Estate Investment Analysis"
    report_tagline: str = "Does My Deal Pencil?"
    report_generated_by: str = "Generated by Deal Pencil"
    report_contact: str = "For more information or to discuss financing options, contact your advisor."
    report_filename: str = "deal-analysis.pdf"


settings = Settings()
