# Copyright Epic Games, Inc. All Rights Reserved.

import builtins
import socket
import threading
import unittest
from colosseum.client import Client, Session
import colosseum.utils as utils
from colosseum.error import *
from mock_server import MockServer, fixed_response
from time import time


class SocketTest(unittest.TestCase):
    def test_free_socket(self):
        port = utils.find_available_port()
        self.assertTrue(port > 0)
        self.assertTrue(utils.is_port_available(port))


class SessionTest(unittest.TestCase):
    def test_connection_refused(self):
        port = utils.find_available_port()
        time_start = time()
        with self.assertRaises(ConnectionError):
            Session(utils.LOCALHOST, port)
        self.assertLess(time() - time_start, 5)

    def test_connection_error_is_a_builtin_connection_error(self):
        port = utils.find_available_port()
        with self.assertRaises(builtins.ConnectionError):
            Session(utils.LOCALHOST, port)

    def test_close(self):
        with MockServer() as s:
            session = Session(utils.LOCALHOST, s.port)
            self.assertTrue(session.connected)
            self.assertEqual(session.address, (utils.LOCALHOST, s.port))
            session.close()
            self.assertFalse(session.connected)
            # closing twice is fine
            session.close()
            with self.assertRaises(ConnectionError):
                session.send(b'\x90')
            with self.assertRaises(ConnectionError):
                session.receive()

    def test_closed_by_host(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.bind((utils.LOCALHOST, 0))
            server.listen(1)
            with Session(utils.LOCALHOST, server.getsockname()[1]) as session:
                conn, _ = server.accept()
                conn.close()
                with self.assertRaises(ConnectionError):
                    session.receive()
                self.assertFalse(session.connected)

    def test_receive_reassembles_partial_messages(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.bind((utils.LOCALHOST, 0))
            server.listen(1)
            with Session(utils.LOCALHOST, server.getsockname()[1]) as session:
                conn, _ = server.accept()
                with conn:
                    # [1, 0, None, 'chunked'] sent a few bytes at a time
                    payload = b'\x94\x01\x00\xc0\xa7chunked'

                    def trickle():
                        for i in range(0, len(payload), 3):
                            conn.sendall(payload[i:i + 3])

                    t = threading.Thread(target=trickle)
                    t.start()
                    self.assertEqual(session.receive(), [1, 0, None, 'chunked'])
                    t.join()

    def test_undecodable_bytes(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.bind((utils.LOCALHOST, 0))
            server.listen(1)
            with Session(utils.LOCALHOST, server.getsockname()[1]) as session:
                conn, _ = server.accept()
                with conn:
                    # 0xc1 is never used by msgpack
                    conn.sendall(b'\xc1')
                    with self.assertRaises(ProtocolError):
                        session.receive()
                    self.assertFalse(session.connected)
                    with self.assertRaises(ConnectionError):
                        session.receive()


class ClientTest(unittest.TestCase):
    def test_rpc_functions(self):
        with MockServer() as s:
            with Client(server_port=s.port) as c:
                self.assertTrue(c.call('ping'))
                self.assertEqual(c.call('sum', 1, 2), 3)
                with self.assertRaises(RemoteError):
                    c.call('not_existing')
                # the session is still usable after a remote error
                self.assertTrue(c.ensure_connection())

    def test_request_envelope(self):
        with MockServer() as s:
            with Client(server_port=s.port) as c:
                c.call('armDisarm', True, '')
                c.call('ping', call_id=3)
            self.assertEqual(s.requests, [[0, 0, 'armDisarm', [True, '']], [0, 3, 'ping', []]])

    def test_arm_call(self):
        with MockServer(responder=fixed_response([1, 0, None, True])) as s:
            with Client(server_port=s.port) as c:
                self.assertIs(c.call('armDisarm', True, ''), True)

    def test_arm_call_remote_error(self):
        with MockServer(responder=fixed_response([1, 0, 'vehicle not found', None])) as s:
            with Client(server_port=s.port) as c:
                with self.assertRaises(RemoteError) as ctx:
                    c.call('armDisarm', True, '')
                self.assertEqual(ctx.exception.error, 'vehicle not found')
                self.assertEqual(ctx.exception.method, 'armDisarm')

    def test_arm_call_wrong_call_id(self):
        with MockServer(responder=fixed_response([1, 5, None, True])) as s:
            with Client(server_port=s.port) as c:
                with self.assertRaises(ProtocolError):
                    c.call('armDisarm', True, '')

    def test_echoed_call_id(self):
        with MockServer(responder=lambda request: [1, request[1], None, request[1]]) as s:
            with Client(server_port=s.port) as c:
                for call_id in (0, 1, 255, 65536, 2 ** 32 - 1):
                    self.assertEqual(c.call('foo', call_id=call_id), call_id)

    def test_wrong_message_type(self):
        with MockServer(responder=fixed_response([0, 0, None, True])) as s:
            with Client(server_port=s.port) as c:
                with self.assertRaises(ProtocolError):
                    c.call('foo')

    def test_result_pass_through(self):
        results = [None, '', b'', [], {}, 0, -1, 3.25, 'text', b'\x00\x01\xff', [1, 'a', [None]],
                   {'x_val': 1.0, 'nested': {'list': [1, 2]}}]
        for result in results:
            with MockServer(responder=fixed_response([1, 0, None, result])) as s:
                with Client(server_port=s.port) as c:
                    self.assertEqual(c.call('foo'), result)

    def test_integer_map_keys(self):
        with MockServer(responder=fixed_response([1, 0, None, {1: 'a', 'nested': {2: None}}])) as s:
            with Client(server_port=s.port) as c:
                self.assertEqual(c.call('foo'), {1: 'a', 'nested': {2: None}})

    def test_responses_match_call_order(self):
        with MockServer() as s:
            with Client(server_port=s.port) as c:
                for i in range(20):
                    self.assertEqual(c.call('sum', i, 1), i + 1)

    def test_shared_between_threads(self):
        with MockServer() as s:
            with Client(server_port=s.port) as c:
                import concurrent.futures
                with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
                    futures = {i: executor.submit(c.call, 'sum', i, i) for i in range(32)}
                    for i, future in futures.items():
                        self.assertEqual(future.result(), 2 * i)

    def test_connection_timeout(self):
        # a listening socket that never accepts, connecting works but nobody answers
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
            server.bind((utils.LOCALHOST, 0))
            server.listen(1)
            c = Client(server_port=server.getsockname()[1], timeout=0.1)
            with self.assertRaises(ConnectionTimeoutError):
                c.call('foo')
            self.assertFalse(c.connected)
            with self.assertRaises(ConnectionError):
                c.call('foo')

    def test_unreachable_host(self):
        with self.assertRaises(ConnectionError):
            Client(server_port=utils.find_available_port())


if __name__ == '__main__':
    unittest.main()
