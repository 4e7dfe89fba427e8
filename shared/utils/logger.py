"""
Logging utilities for the iLocal auth service

Provides centralized logging configuration and utilities.
"""

import os
import logging
import logging.config
from copy import deepcopy
from typing import Optional, Dict, Any

import yaml

# Default logging configuration
DEFAULT_LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'default': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'detailed': {
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(lineno)d - %(message)s',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        },
        'json': {
            'format': '{"timestamp": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "module": "%(module)s", "function": "%(funcName)s", "line": %(lineno)d, "message": "%(message)s"}',
            'datefmt': '%Y-%m-%d %H:%M:%S'
        }
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'INFO',
            'formatter': 'default',
            'stream': 'ext://sys.stdout'
        }
    },
    'root': {
        'level': 'INFO',
        'handlers': ['console']
    },
    'loggers': {
        'auth_service': {
            'level': 'INFO',
            'handlers': ['console'],
            'propagate': False
        }
    }
}


def load_logging_config(config_path: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Load a dictConfig mapping from a YAML file

    Returns None when the path is unset, missing or unreadable.
    """
    if not config_path or not os.path.exists(config_path):
        return None

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logging.getLogger(__name__).warning(f"Failed to load logging config from {config_path}: {e}")
        return None

    if not isinstance(config, dict):
        return None
    return config


def setup_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    environment: Optional[str] = None
) -> Dict[str, Any]:
    """
    Setup logging configuration

    Args:
        config_path: Path to a YAML logging configuration file
        log_level: Override log level
        log_format: Override log format ('default', 'detailed', 'json')
        environment: Environment section of the config to merge in

    Returns:
        dict: The configuration that was applied
    """
    config = load_logging_config(config_path) or deepcopy(DEFAULT_LOGGING_CONFIG)

    # Apply environment-specific overrides
    environment = environment or os.getenv('NODE_ENV', 'development')
    if environment in config:
        env_config = config.pop(environment)

        if 'handlers' in env_config:
            config.setdefault('handlers', {}).update(env_config['handlers'])

        if 'loggers' in env_config:
            config.setdefault('loggers', {}).update(env_config['loggers'])

        if 'root' in env_config:
            config.setdefault('root', {}).update(env_config['root'])

    if log_level:
        log_level = log_level.upper()
        for logger_config in config.get('loggers', {}).values():
            logger_config['level'] = log_level
        if 'root' in config:
            config['root']['level'] = log_level
        for handler_config in config.get('handlers', {}).values():
            handler_config['level'] = log_level

    if log_format and log_format in config.get('formatters', {}):
        for handler_config in config.get('handlers', {}).values():
            handler_config['formatter'] = log_format

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        # Fallback to basic configuration
        logging.basicConfig(
            level=getattr(logging, log_level or 'INFO', logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger(__name__).error(f"Failed to configure logging: {e}")

    return config


class AuditLogger:
    """Logger for authentication audit events"""

    def __init__(self, name: str = "auth_service.audit"):
        self.logger = logging.getLogger(name)

    def log_user_action(
        self,
        email: str,
        action: str,
        success: bool = True,
        details: Optional[Dict[str, Any]] = None
    ):
        """Log an authentication action for the audit trail"""
        outcome = "succeeded" if success else "failed"
        self.logger.log(
            logging.INFO if success else logging.WARNING,
            f"Auth action {action} {outcome} for {email}",
            extra={
                'email': email,
                'action': action,
                'success': success,
                'details': details or {},
                'event_type': 'auth_action'
            }
        )


def get_audit_logger() -> AuditLogger:
    """Get audit logger instance"""
    return AuditLogger()
