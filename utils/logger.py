import logging
import logging.config


def setup_logging(planner_config) -> logging.Logger:
    """Настройка логирования из конфигурации (консоль + ротация файла)"""
    if planner_config.log_to_file:
        planner_config.log_dir.mkdir(exist_ok=True, parents=True)

    logging.config.dictConfig(planner_config.get_logging_config())
    return logging.getLogger("planner")
