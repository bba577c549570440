"""
CLI 테스트
"""

import json
import logging
import os
import unittest
from unittest.mock import patch

from click.testing import CliRunner

from trip_route.logger_config import LOGGER_NAME
from trip_route.main import main

PLACES = [
    {'id': 'a', 'name': 'Louvre', 'latitude': 48.8606, 'longitude': 2.3376},
    {'id': 'b', 'name': 'Dinner', 'category': 'food'},
    {'id': 'c', 'name': 'Eiffel Tower', 'latitude': 48.8584, 'longitude': 2.2945},
    {'id': 'd', 'name': 'Notre-Dame', 'latitude': 48.8530, 'longitude': 2.3499},
]


@patch.dict(os.environ, {'MAPBOX_ACCESS_TOKEN': ''})
class TestMain(unittest.TestCase):
    """CLI 실행 테스트"""

    def setUp(self):
        self.runner = CliRunner()

    def tearDown(self):
        logging.getLogger(LOGGER_NAME).handlers.clear()

    def test_optimize_json(self):
        with self.runner.isolated_filesystem():
            with open('places.json', 'w', encoding='utf-8') as f:
                json.dump(PLACES, f)

            result = self.runner.invoke(main, ['-i', 'places.json', '-o', 'out.json', '-p', 'walking'])

            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn('out.json', result.output)
            with open('out.json', encoding='utf-8') as f:
                data = json.load(f)
            self.assertEqual(len(data['places']), 4)
            self.assertEqual(data['places'][-1]['id'], 'b')

    def test_not_enough_coordinates(self):
        with self.runner.isolated_filesystem():
            with open('places.json', 'w', encoding='utf-8') as f:
                json.dump(PLACES[:2], f)

            result = self.runner.invoke(main, ['-i', 'places.json', '-o', 'out.json'])

            self.assertEqual(result.exit_code, 1)
            self.assertFalse(os.path.exists('out.json'))

    def test_missing_input_file(self):
        result = self.runner.invoke(main, ['-i', 'does-not-exist.json'])
        self.assertNotEqual(result.exit_code, 0)

    def test_invalid_profile(self):
        result = self.runner.invoke(main, ['-i', 'places.json', '-p', 'flying'])
        self.assertEqual(result.exit_code, 2)

    def test_invalid_max_coordinates(self):
        with self.runner.isolated_filesystem():
            with open('places.json', 'w', encoding='utf-8') as f:
                json.dump(PLACES, f)

            result = self.runner.invoke(main, ['-i', 'places.json', '--max-coordinates', '1'])

            self.assertEqual(result.exit_code, 1)


if __name__ == '__main__':
    unittest.main()
