from addressmap.configs.logging_init import initialize_loggers, logger
from addressmap.configs.settings_models import Settings

# Overwrite priority: environment variables > default values
settings = Settings()

initialize_loggers(verbose_level=settings.logging.verbosity_level)

logger.debug(settings)
