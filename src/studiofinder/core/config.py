from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RIGHTS_CONFIRMATION_TEXT = (
    "I confirm that I own the rights to the images I upload, or have permission "
    "from the rights holder to publish them on this studio listing."
)


class Settings(BaseSettings):
    env: str = "local"

    # allow full URL override
    database_url_override: str | None = None

    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "studiofinder"
    db_user: str = "postgres"
    db_password: str | None = None

    stripe_api_key: SecretStr | None = None
    stripe_webhook_secret: SecretStr | None = None
    stripe_webhook_tolerance_sec: int = 300

    log_level: str = "INFO"
    log_json: bool = False

    # Membership policy. 5-year renewals are fixed at 60 months.
    membership_new_term_months: int = 12
    membership_early_renewal_months: int = 13
    membership_standard_renewal_months: int = 12

    featured_upgrade_months: int = 6

    # Stored verbatim with every confirmation
    rights_confirmation_text: str = DEFAULT_RIGHTS_CONFIRMATION_TEXT

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        # 1) Prefer explicit DATABASE_URL
        if self.database_url_override:
            return self.database_url_override

        password = self.db_password or ""
        auth = f"{self.db_user}:{password}" if password else self.db_user

        # 2) Fallback to postgres assembled URL
        return (
            f"postgresql+psycopg://{auth}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?connect_timeout=3"
        )


settings = Settings()
