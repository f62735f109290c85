# Copyright Epic Games, Inc. All Rights Reserved.

import builtins


class ColosseumError(Exception):
    pass


class ConnectionError(ColosseumError, builtins.ConnectionError):
    """Raised when the simulation host can't be reached, or when the stream to it has been closed (by either side).
        A session that raised this is unusable, construct a new one.
    """
    pass


class ConnectionTimeoutError(ConnectionError):
    """Raised when a session created with an explicit timeout didn't hear back from the host in time. The session gets
        closed since a late response would leave the stream out of step.
    """
    pass


class ProtocolError(ColosseumError):
    """Raised when the response envelope doesn't match the call it is supposed to answer (wrong message type, wrong
        call id or not an envelope at all), or when the bytes on the stream don't decode as msgpack.
    """
    def __init__(self, message, method=None):
        super().__init__(message)
        self.method = method


class RemoteError(ColosseumError):
    """Raised when the simulation host reports a failure for the call. `error` holds the payload exactly as received.
    """
    def __init__(self, error, method=None):
        super().__init__(error)
        self.error = error
        self.method = method
