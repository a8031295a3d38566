"""Table and health API integration tests (seeded sample tables)"""

from fastapi.testclient import TestClient
import pytest


TABLES = '/api/v1/tables'

pytestmark = [pytest.mark.api, pytest.mark.integration]


@pytest.fixture
def book(client: TestClient, at_day_offset):
    def _book(table_id: str, number_of_people: int = 2, days: int = 1, hour: int = 19) -> str:
        response = client.post(
            '/api/v1/reservations',
            json={
                'table_id': table_id,
                'customer_name': 'Joao Pereira',
                'customer_email': 'joao@example.com',
                'customer_phone': '11 3456 7890',
                'reservation_date_time': at_day_offset(days, hour).isoformat(),
                'number_of_people': number_of_people,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()['id']

    return _book


class TestTables:
    def test_list_active_tables(self, client: TestClient) -> None:
        response = client.get(TABLES)

        assert response.status_code == 200
        ids = [t['id'] for t in response.json()]
        assert len(ids) == 11
        assert 'T012' not in ids

    def test_get_table(self, client: TestClient) -> None:
        response = client.get(f'{TABLES}/T011')

        assert response.json() == {
            'id': 'T011',
            'capacity': 12,
            'is_active': True,
            'location': 'VIP',
        }

    def test_get_inactive_table_is_still_visible(self, client: TestClient) -> None:
        response = client.get(f'{TABLES}/T012')

        assert response.status_code == 200
        assert response.json()['is_active'] is False

    def test_get_unknown_table(self, client: TestClient) -> None:
        assert client.get(f'{TABLES}/T999').status_code == 404

    def test_by_capacity_smallest_first(self, client: TestClient) -> None:
        response = client.get(f'{TABLES}/capacity/9')

        assert [t['id'] for t in response.json()] == ['T010', 'T011']

    def test_by_capacity_rejects_empty_party(self, client: TestClient) -> None:
        assert client.get(f'{TABLES}/capacity/0').status_code == 400


class TestAvailableTables:
    def test_booked_table_is_not_offered(self, client: TestClient, book, at_day_offset) -> None:
        """
        Given: T008 is booked tomorrow at 19:00
        When: searching tables for 7 people at 20:00
        Then: only the other large tables are offered
        """
        book('T008', number_of_people=7)

        response = client.get(
            f'{TABLES}/available',
            params={'people': 7, 'start': at_day_offset(1, 20).isoformat()},
        )

        assert response.status_code == 200
        assert [t['id'] for t in response.json()] == ['T009', 'T010', 'T011']

    def test_rule_violation_is_reported(self, client: TestClient, at_day_offset) -> None:
        response = client.get(
            f'{TABLES}/available',
            params={'people': 2, 'start': at_day_offset(1, 22).isoformat(), 'duration': 120},
        )

        assert response.status_code == 400
        assert response.json()['reason'] == 'out_of_hours'


class TestAvailabilityReport:
    def test_report_counts_active_reservations(
        self, client: TestClient, book, at_day_offset
    ) -> None:
        book('T001', hour=12)
        book('T001', hour=15)
        cancelled = book('T001', hour=19)
        client.put(f'/api/v1/reservations/{cancelled}/cancel')
        tomorrow = at_day_offset(1, 0).date().isoformat()

        response = client.get(f'{TABLES}/T001/availability/{tomorrow}')

        assert response.status_code == 200
        body = response.json()
        assert body['table_id'] == 'T001'
        assert body['date'] == tomorrow
        assert body['total_reservations'] == 2
        assert body['available_slots'] == 10
        assert body['is_fully_occupied'] is False
        assert body['occupancy_rate'] == pytest.approx(2 / 12)
        assert len(body['reservations']) == 2

    def test_report_for_unknown_table(self, client: TestClient, at_day_offset) -> None:
        tomorrow = at_day_offset(1, 0).date().isoformat()

        assert client.get(f'{TABLES}/T999/availability/{tomorrow}').status_code == 404


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get('/api/v1/health')

        assert response.status_code == 200
        body = response.json()
        assert body['status'] == 'UP'
        assert {'timestamp', 'application', 'version'} <= body.keys()

    def test_ready(self, client: TestClient) -> None:
        response = client.get('/api/v1/health/ready')

        assert response.json()['status'] == 'READY'
