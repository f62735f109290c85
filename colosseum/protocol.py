# Copyright Epic Games, Inc. All Rights Reserved.

"""
msgpack-rpc envelopes as understood by the simulation host.

A call is the 4-element array [REQUEST, call_id, method, [args...]] and the host answers with
[RESPONSE, call_id, error, result]. Every envelope is a single msgpack object so there's no extra framing on the
stream, msgpack values carry their own length.
"""

import msgpack
from .error import ProtocolError, RemoteError

REQUEST = 0
RESPONSE = 1

# msgpack-rpc msgids are uint32
MAX_CALL_ID = 2 ** 32 - 1


def _to_msgpack(obj):
    # value types (Vector3r, Pose, ImageRequest...) know how to serialize themselves
    if hasattr(obj, 'to_msgpack'):
        return obj.to_msgpack()
    raise TypeError('Object of type {} is not msgpack serializable'.format(type(obj).__name__))


def pack_request(method, args=(), call_id=0, default=_to_msgpack):
    if type(call_id) != int or not 0 <= call_id <= MAX_CALL_ID:
        raise ValueError('call_id must be an integer in [0, {}], got {!r}'.format(MAX_CALL_ID, call_id))
    return msgpack.packb([REQUEST, call_id, method, list(args)], use_bin_type=True, default=default)


def new_unpacker():
    # images come back as msgpack str holding arbitrary bytes, surrogateescape keeps them intact
    # host maps may be keyed by integers, strict_map_key would reject those
    return msgpack.Unpacker(raw=False, unicode_errors='surrogateescape', strict_map_key=False)


def validate_response(response, method, call_id=0):
    """ Checks `response` against the call it answers and returns the result payload untouched.

    Raises:
        ProtocolError: the response isn't a RESPONSE envelope or answers a different call id
        RemoteError: the host reported a failure; its error payload is passed along as-is
    """
    if type(response) not in (list, tuple) or len(response) != 4:
        raise ProtocolError('malformed response for method {}: {!r}'.format(method, response), method)

    message_type, response_id, error, result = response
    # bools and floats compare equal to 1 and 0, they are not valid envelope fields
    if type(message_type) is not int or message_type != RESPONSE:
        raise ProtocolError('response is not a RESPONSE message for method {}'.format(method), method)
    if type(response_id) is not int or response_id != call_id:
        raise ProtocolError('call id mismatch: expected {}, got {}'.format(call_id, response_id), method)
    if error is not None:
        raise RemoteError(error, method)
    return result
