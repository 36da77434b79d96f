"""Get log settings."""

import os
import platform
import sys
from logging.handlers import SysLogHandler

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def get_logger_config(log_dir,
                      logging_env="no_env",
                      edx_filename="ls2_copy.log",
                      dev_env=False,
                      syslog_addr=None,
                      debug=False,
                      local_loglevel='INFO',
                      console_loglevel=None,
                      service_variant=None):
    """
    Return the appropriate logging config dictionary. Assign the result of
    this to the LOGGING var in your settings, so that settings modules which
    extend each other can call it again without resetting the logging state.

    If dev_env is set to true logging will not be done via local rsyslogd,
    instead, application logs will be dropped in log_dir as "edx_filename".
    With debug set, only the console handler is configured. A remote syslog
    handler is added only when syslog_addr is given.
    """

    # Revert to INFO if an invalid string is passed in
    if local_loglevel not in LOG_LEVELS:
        local_loglevel = 'INFO'

    if console_loglevel is None or console_loglevel not in LOG_LEVELS:
        console_loglevel = 'DEBUG' if debug else 'INFO'

    if service_variant is None:
        service_variant = ''

    hostname = platform.node().split(".")[0]
    syslog_format = ("[service_variant={service_variant}]"
                     "[%(name)s][env:{logging_env}] %(levelname)s "
                     "[{hostname}  %(process)d] [%(filename)s:%(lineno)d] "
                     "- %(message)s").format(service_variant=service_variant,
                                             logging_env=logging_env,
                                             hostname=hostname)

    handlers = ['console'] if debug else ['console', 'local']
    if syslog_addr and not debug:
        handlers.append('syslogger-remote')

    logger_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s %(levelname)s %(process)d '
                          '[%(name)s] %(filename)s:%(lineno)d - %(message)s',
            },
            'syslog_format': {'format': syslog_format},
        },
        'handlers': {
            'console': {
                'level': console_loglevel,
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
                'stream': sys.stdout,
            },
        },
        'loggers': {
            'django': {
                'handlers': handlers,
                'level': 'INFO',
                'propagate': False,
            },
            '': {
                'handlers': handlers,
                'level': 'DEBUG',
                'propagate': False
            },
        }
    }

    if 'syslogger-remote' in handlers:
        logger_config['handlers']['syslogger-remote'] = {
            'level': 'INFO',
            'class': 'logging.handlers.SysLogHandler',
            'address': syslog_addr,
            'formatter': 'syslog_format',
        }

    if debug:
        return logger_config

    if dev_env:
        logger_config['handlers']['local'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'level': local_loglevel,
            'formatter': 'standard',
            'filename': os.path.join(log_dir, edx_filename),
            'maxBytes': 1024 * 1024 * 2,
            'backupCount': 5,
        }
    else:
        # for production environments we will only
        # log INFO and up
        logger_config['loggers']['']['level'] = 'INFO'
        logger_config['handlers']['local'] = {
            'level': local_loglevel,
            'class': 'logging.handlers.SysLogHandler',
            'address': '/dev/log',
            'formatter': 'syslog_format',
            'facility': SysLogHandler.LOG_LOCAL0,
        }

    return logger_config
