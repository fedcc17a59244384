from loguru import logger

# Disable logging by default for library usage.
# Application entry points (e.g., skill_creator.cli) should call logger.enable("skill_creator")
# to enable logging.
logger.disable("skill_creator")
