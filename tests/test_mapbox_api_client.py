"""
Mapbox Matrix API 클라이언트 테스트
"""

import unittest
from unittest.mock import MagicMock

import requests

from trip_route.mapbox_api_client import MapboxMatrixApiClient

COORDINATES = [(2.3522, 48.8566), (2.2945, 48.8584)]


def make_client(response=None, side_effect=None):
    session = MagicMock()
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    return MapboxMatrixApiClient('pk.test', session=session,
                                 base_url='https://example.test/matrix/'), session


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = ''
    return response


class TestMapboxMatrixApiClient(unittest.TestCase):
    """매트릭스 API 클라이언트 테스트"""

    def test_requires_access_token(self):
        with self.assertRaises(ValueError):
            MapboxMatrixApiClient('')

    def test_build_url(self):
        client, _ = make_client()
        self.assertEqual(client.build_url(COORDINATES, 'cycling'),
                         'https://example.test/matrix/cycling/2.3522,48.8566;2.2945,48.8584')

    def test_successful_request(self):
        payload = {'code': 'Ok', 'distances': [[0, 4300.5], [4299.1, 0]],
                   'durations': [[0, 600], [610, 0]]}
        client, session = make_client(make_response(payload=payload))

        result = client.get_matrix(COORDINATES, 'driving')

        self.assertEqual(result, payload)
        self.assertEqual(client.get_api_usage_info()['total_requests'], 1)
        _, kwargs = session.get.call_args
        self.assertEqual(kwargs['params'], {'access_token': 'pk.test',
                                            'annotations': 'distance,duration'})
        self.assertEqual(kwargs['timeout'], client.timeout)

    def test_unknown_profile(self):
        client, session = make_client()
        with self.assertRaises(ValueError):
            client.get_matrix(COORDINATES, 'driving-traffic')
        session.get.assert_not_called()

    def test_network_error(self):
        client, _ = make_client(side_effect=requests.ConnectionError("down"))
        with self.assertRaises(RuntimeError):
            client.get_matrix(COORDINATES)

    def test_http_errors(self):
        cases = {401: ValueError, 403: ValueError, 422: ValueError,
                 429: ValueError, 500: RuntimeError, 404: RuntimeError}
        for status_code, error_type in cases.items():
            client, _ = make_client(make_response(status_code, {'message': 'nope'}))
            with self.assertRaises(error_type):
                client.get_matrix(COORDINATES)

    def test_non_ok_code(self):
        client, _ = make_client(make_response(payload={'code': 'InvalidInput', 'message': 'bad'}))
        with self.assertRaises(ValueError):
            client.get_matrix(COORDINATES)

    def test_wrong_matrix_shape(self):
        client, _ = make_client(make_response(payload={'code': 'Ok', 'distances': [[0]]}))
        with self.assertRaises(ValueError):
            client.get_matrix(COORDINATES)

    def test_extract_durations(self):
        self.assertEqual(
            MapboxMatrixApiClient.extract_durations({'durations': [[0, 5], [6, 0]]}, 2),
            [[0.0, 5.0], [6.0, 0.0]]
        )
        self.assertIsNone(MapboxMatrixApiClient.extract_durations({}, 2))
        self.assertIsNone(MapboxMatrixApiClient.extract_durations({'durations': [[0, None], [6, 0]]}, 2))


if __name__ == '__main__':
    unittest.main()
