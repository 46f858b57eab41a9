# DEPENDENCIES
import sys
import time
import json
import logging
import traceback
from typing import Any
from typing import Dict
from typing import Union
from pathlib import Path
from typing import Optional
from functools import wraps
from datetime import datetime
from logging.handlers import RotatingFileHandler


APP_LOGGER_NAME = "contract_analyzer"


class ContractAnalyzerLogger:
    """
    Logging for the contract analysis service

    Features:
    - Structured JSON records
    - Separate files for errors and stage timings
    - Size-based log rotation
    """
    _loggers      : Dict[str, logging.Logger] = dict()
    _log_dir      : Optional[Path]            = None
    _level        : int                       = logging.INFO
    _max_bytes    : int                       = 5 * 1024 * 1024
    _backup_count : int                       = 3


    @classmethod
    def setup(cls, log_dir: Union[str, Path] = "logs", app_name: str = APP_LOGGER_NAME, level: Union[str, int] = logging.INFO,
              max_bytes: int = 5 * 1024 * 1024, backup_count: int = 3):
        """
        Setup logging system

        Arguments:
        ----------
            log_dir      { str } : Directory for log files

            app_name     { str } : Application name, used as logger name and file prefix

            level     { str|int } : Level of the main logger

            max_bytes    { int } : Rotate a log file once it reaches this size

            backup_count { int } : Number of rotated files to keep
        """
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

            if not isinstance(level, int):
                level = logging.INFO

        cls._log_dir      = Path(log_dir)
        cls._log_dir.mkdir(parents = True, exist_ok = True)
        cls._level        = level
        cls._max_bytes    = max_bytes
        cls._backup_count = backup_count

        cls._create_logger(name     = app_name,
                           log_file = cls._log_dir / f"{app_name}.log",
                           level    = level,
                          )

        cls._create_logger(name     = f"{app_name}.error",
                           log_file = cls._log_dir / f"{app_name}_error.log",
                           level    = logging.ERROR,
                          )

        cls._create_logger(name     = f"{app_name}.performance",
                           log_file = cls._log_dir / f"{app_name}_performance.log",
                           level    = logging.INFO,
                          )


    @classmethod
    def _create_logger(cls, name: str, log_file: Path, level: int) -> logging.Logger:
        logger           = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False

        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        file_handler     = RotatingFileHandler(log_file,
                                               maxBytes    = cls._max_bytes,
                                               backupCount = cls._backup_count,
                                               encoding    = "utf-8",
                                              )
        file_handler.setLevel(level)

        # Console only shows warnings and above
        console_handler  = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)

        formatter        = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt = '%Y-%m-%d %H:%M:%S')
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        cls._loggers[name] = logger

        return logger


    @classmethod
    def get_logger(cls, name: str = APP_LOGGER_NAME) -> logging.Logger:
        """
        Get logger by name, initialising the logging system on first use
        """
        if not cls._loggers:
            cls.setup()

        return cls._loggers.get(name, logging.getLogger(name))


    @classmethod
    def log_structured(cls, level: int, message: str, **kwargs):
        logger   = cls.get_logger()

        log_data = {"timestamp" : datetime.now().isoformat(),
                    "message"   : message,
                    **kwargs
                   }

        logger.log(level, json.dumps(log_data, ensure_ascii = False, default = str))


    @classmethod
    def log_error(cls, error: Union[Exception, str], context: Optional[Dict[str, Any]] = None):
        """
        Log error with traceback and context

        Arguments:
        ----------
            error   { Exception|str } : Exception object or plain message

            context     { dict }      : Additional context dictionary
        """
        error_logger = cls.get_logger(f"{APP_LOGGER_NAME}.error")

        if isinstance(error, BaseException):
            error_data = {"timestamp"     : datetime.now().isoformat(),
                          "error_type"    : type(error).__name__,
                          "error_message" : str(error),
                          "traceback"     : "".join(traceback.format_exception(type(error), error, error.__traceback__)),
                          "context"       : context or {},
                         }

        else:
            error_data = {"timestamp"     : datetime.now().isoformat(),
                          "error_type"    : "message",
                          "error_message" : str(error),
                          "context"       : context or {},
                         }

        error_logger.error(json.dumps(error_data, indent = 2, ensure_ascii = False, default = str))


    @classmethod
    def log_performance(cls, operation: str, duration: float, **metrics):
        perf_logger = cls.get_logger(f"{APP_LOGGER_NAME}.performance")

        perf_data   = {"timestamp"        : datetime.now().isoformat(),
                       "operation"        : operation,
                       "duration_seconds" : round(duration, 3),
                       **metrics
                      }

        perf_logger.info(json.dumps(perf_data, default = str))


    @staticmethod
    def log_execution_time(operation_name: Optional[str] = None):
        """
        Decorator to log execution time of functions
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                op_name    = operation_name or func.__name__
                start_time = time.perf_counter()

                try:
                    result = func(*args, **kwargs)

                except Exception as e:
                    ContractAnalyzerLogger.log_performance(operation  = op_name,
                                                           duration   = time.perf_counter() - start_time,
                                                           status     = "error",
                                                           error_type = type(e).__name__,
                                                          )
                    raise

                ContractAnalyzerLogger.log_performance(operation = op_name,
                                                       duration  = time.perf_counter() - start_time,
                                                       status    = "success",
                                                      )
                return result

            return wrapper

        return decorator



# Convenience functions
def log_info(message: str, **kwargs):
    ContractAnalyzerLogger.log_structured(logging.INFO, message, **kwargs)


def log_warning(message: str, **kwargs):
    ContractAnalyzerLogger.log_structured(logging.WARNING, message, **kwargs)


def log_error(error: Union[Exception, str], context: Optional[Dict[str, Any]] = None):
    ContractAnalyzerLogger.log_error(error, context)
