from pydantic_settings import BaseSettings

from .yaml_config import get_defaults

_defaults = get_defaults()


class Settings(BaseSettings):
    model_config = {"env_prefix": "PSL_RESOLVER_"}

    # Public Suffix List source (.dat text or the JSON rule dump)
    psl_path: str | None = _defaults.get("psl_path")

    # IDNA conversion flags, see domain.IdnaOption
    ascii_idna_option: int = _defaults.get("ascii_idna_option", 0)
    unicode_idna_option: int = _defaults.get("unicode_idna_option", 0)

    # ICANN_DOMAINS, PRIVATE_DOMAINS or EFFECTIVE
    default_section: str = _defaults.get("default_section", "EFFECTIVE")

    log_level: str = _defaults.get("log_level", "info")


settings = Settings()
