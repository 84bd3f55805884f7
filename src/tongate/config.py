"""Application configuration using pydantic-settings.

The admin mnemonic is only ever exposed through ``mnemonic_words``; the
redacted view used by health endpoints reports whether it is set, nothing more.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONTRACT_ADDRESS = "kQAQWKYnRVACaHUzNehchCZ2e7bOXDSrCNpoCEvr8773QB90"

DEFAULT_ALLOWED_ORIGINS = ",".join(
    [
        "https://clashwarriors.tech",
        "https://play.clashwarriors.tech",
        "https://adorable-fudge-c73118.netlify.app",
        "http://localhost:5173",
        "https://web.telegram.org",
        "https://webk.telegram.org",
        "https://webz.telegram.org",
    ]
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=3000, description="API server port")
    allowed_origins: str = Field(
        default=DEFAULT_ALLOWED_ORIGINS,
        description="Comma-separated list of browser origins allowed by CORS",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")
    dry_run: bool = Field(
        default=False, description="Use the in-memory ledger (no real broadcasts)"
    )

    # ======================
    # Admin wallet
    # ======================
    mnemonic: Optional[str] = Field(
        default=None, description="Admin wallet 12/24 word mnemonic, space separated"
    )
    wallet_workchain: int = Field(default=0, description="Admin wallet workchain id")

    # ======================
    # TON RPC
    # ======================
    toncenter_endpoint: str = Field(
        default="https://testnet.toncenter.com/api/v2/jsonRPC",
        description="toncenter v2 JSON-RPC endpoint",
    )
    toncenter_key: Optional[str] = Field(default=None, description="toncenter API key")
    rpc_timeout: float = Field(default=60.0, description="Timeout for every RPC call (seconds)")

    # ======================
    # Contract
    # ======================
    contract_address: str = Field(
        default=DEFAULT_CONTRACT_ADDRESS, description="Target WalletMap contract address"
    )
    balance_getter: str = Field(
        default="getWalletAmount", description="Contract get-method returning a user balance"
    )
    airdrop_amount: str = Field(
        default="50000", description="Tokens credited per airdrop claim (display units)"
    )
    claim_gas: str = Field(default="0.05", description="TON attached to a Claim message")
    withdraw_gas: str = Field(
        default="0.5", description="TON the client attaches to a WithdrawRequest"
    )

    # ======================
    # Keep-alive
    # ======================
    external_hostname: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("RENDER_EXTERNAL_HOSTNAME", "EXTERNAL_HOSTNAME"),
        description="Public hostname used by the keep-alive self ping",
    )
    keep_alive_interval: float = Field(
        default=30.0, description="Seconds between keep-alive pings (0 = disabled)"
    )

    @property
    def mnemonic_words(self) -> list[str]:
        """Split the mnemonic into words (empty list if not configured)."""
        if not self.mnemonic:
            return []
        return self.mnemonic.split()

    @property
    def has_mnemonic(self) -> bool:
        """Check if an admin mnemonic is configured."""
        return len(self.mnemonic_words) > 0

    @property
    def allowed_origin_list(self) -> list[str]:
        """Parse allowed origins into a list."""
        return [o.strip().rstrip("/") for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def keep_alive_url(self) -> str:
        """URL of our own health endpoint."""
        if self.external_hostname:
            return f"https://{self.external_hostname}/health"
        return f"http://localhost:{self.port}/health"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "api_host": self.api_host,
            "port": self.port,
            "allowed_origins": self.allowed_origin_list,
            "mnemonic": "***" if self.has_mnemonic else "(not set)",
            "ton": {
                "endpoint": self.toncenter_endpoint,
                "api_key": "***" if self.toncenter_key else "(not set)",
                "timeout": self.rpc_timeout,
            },
            "contract": {
                "address": self.contract_address,
                "balance_getter": self.balance_getter,
                "airdrop_amount": self.airdrop_amount,
                "claim_gas": self.claim_gas,
                "withdraw_gas": self.withdraw_gas,
            },
            "keep_alive": {
                "url": self.keep_alive_url,
                "interval": self.keep_alive_interval,
            },
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class ConfigurationError(Exception):
    """Raised when required configuration is missing or malformed."""
    pass
