# Copyright Epic Games, Inc. All Rights Reserved.

from gym import logger


set_level = logger.set_level
DEBUG = logger.DEBUG
INFO = logger.INFO
WARN = logger.WARN
ERROR = logger.ERROR
DISABLED = logger.DISABLED


def _prefixed(msg, args):
    if args:
        msg = msg % args
    # gym applies its own '%' formatting to whatever we hand over
    return 'colosseum: ' + msg.replace('%', '%%')

def debug(msg, *args):
    logger.debug(_prefixed(msg, args))

def info(msg, *args):
    logger.info(_prefixed(msg, args))

def warn(msg, *args):
    logger.warn(_prefixed(msg, args))

def error(msg, *args):
    logger.error(_prefixed(msg, args))

def get_level():
    return logger.min_level
