"""
여행 일정 모델 테스트
"""

import math
import unittest
from unittest.mock import MagicMock

from trip_route.config import Settings
from trip_route.itinerary import Day, Place, Trip, optimize_day
from trip_route.route_optimizer import RouteOptimizer


def sample_trip():
    day1 = Day(id='d1', date='2026-05-01', places=[
        Place(id='a', name='Gyeongbokgung', latitude=37.5796, longitude=126.9770,
              category='culture', estimated_cost=3000),
        Place(id='b', name='Hotel', estimated_cost=120000, time_slot='evening'),
        Place(id='c', name='Gangnam', latitude=37.4979, longitude=127.0276,
              category='shopping', estimated_cost=50000),
        Place(id='d', name='Myeongdong', latitude=37.5636, longitude=126.9869,
              category='food', estimated_cost=20000, specific_time='12:30'),
    ])
    day2 = Day(id='d2', date='2026-05-02', places=[
        Place(id='e', name='Airport', latitude=37.4602, longitude=126.4407, estimated_cost=0),
    ])
    return Trip(name='Seoul', start_date='2026-05-01', end_date='2026-05-02',
                people_count=2, total_budget=500000, days=[day1, day2])


class TestPlace(unittest.TestCase):
    """장소 변환 테스트"""

    def test_from_dict(self):
        place = Place.from_dict({
            'id': 7, 'name': 'Cafe', 'latitude': '37.5', 'longitude': 127.01,
            'category': 'coffee', 'estimated_cost': 5500, 'time_slot': 'afternoon',
            'specific_time': '15:00', 'note': 'window seat'
        })
        self.assertEqual(place.id, '7')
        self.assertEqual(place.latitude, 37.5)
        self.assertEqual(place.longitude, 127.01)
        self.assertEqual(place.category, 'coffee')
        self.assertEqual(place.estimated_cost, 5500.0)
        self.assertEqual(place.extra, {'note': 'window seat'})

    def test_from_dict_missing_values(self):
        place = Place.from_dict({'name': 'Somewhere', 'latitude': float('nan'),
                                 'longitude': '', 'estimated_cost': None},
                                default_id='PLACE_3')
        self.assertEqual(place.id, 'PLACE_3')
        self.assertIsNone(place.latitude)
        self.assertIsNone(place.longitude)
        self.assertEqual(place.estimated_cost, 0.0)
        self.assertEqual(place.time_slot, 'morning')
        self.assertEqual(place.category, 'other')

    def test_from_dict_invalid_coordinate(self):
        place = Place.from_dict({'id': 'x', 'name': 'X', 'latitude': 'north', 'longitude': 1})
        self.assertIsNone(place.latitude)
        self.assertEqual(place.longitude, 1.0)

    def test_to_dict_round_trip_fields(self):
        place = Place(id='a', name='A', latitude=1.0, longitude=2.0, extra={'memo': 'x'})
        data = place.to_dict()
        self.assertEqual(data['memo'], 'x')
        self.assertEqual(Place.from_dict(data), place)


class TestTrip(unittest.TestCase):
    """여행 일정 테스트"""

    def test_costs(self):
        trip = sample_trip()
        self.assertEqual(trip.get_day('d1').total_cost(), 193000)
        self.assertEqual(trip.total_cost(), 193000)
        self.assertEqual(trip.cost_per_person(), 96500)
        self.assertIsNone(trip.get_day('missing'))

    def test_cost_per_person_without_people(self):
        trip = Trip(people_count=0)
        self.assertEqual(trip.cost_per_person(), 0.0)


class TestOptimizeDay(unittest.TestCase):
    """일자 최적화 테스트"""

    def setUp(self):
        self.optimizer = RouteOptimizer(Settings())

    def test_optimize_day(self):
        trip = sample_trip()
        original_ids = [p.id for p in trip.days[0].places]

        new_trip, total_distance = optimize_day(trip, 'd1', optimizer=self.optimizer)

        self.assertIsNot(new_trip, trip)
        self.assertEqual([p.id for p in trip.days[0].places], original_ids)
        new_ids = [p.id for p in new_trip.get_day('d1').places]
        self.assertEqual(new_ids[-1], 'b')
        self.assertCountEqual(new_ids, original_ids)
        self.assertTrue(total_distance > 0 and math.isfinite(total_distance))
        self.assertIs(new_trip.get_day('d2'), trip.get_day('d2'))

    def test_unknown_day(self):
        trip = sample_trip()
        self.assertEqual(optimize_day(trip, 'nope', optimizer=self.optimizer), (trip, None))

    def test_day_with_single_place(self):
        trip = sample_trip()
        optimizer = MagicMock()
        self.assertEqual(optimize_day(trip, 'd2', optimizer=optimizer), (trip, None))
        optimizer.optimize_places_order.assert_not_called()

    def test_optimizer_returns_none(self):
        trip = sample_trip()
        optimizer = MagicMock()
        optimizer.optimize_places_order.return_value = None
        self.assertEqual(optimize_day(trip, 'd1', 'walking', optimizer), (trip, None))
        optimizer.optimize_places_order.assert_called_once_with(trip.days[0].places, 'walking')


if __name__ == '__main__':
    unittest.main()
