"""
Integration Tests for live services
"""
from datetime import datetime, timedelta
import uuid

import pytest
from httpx import AsyncClient

from ministry_hub.models import LiveService, ServiceAttendance, ServicePoll
from tests.conftest import create_member, headers_for


async def schedule_service(db_session, **kwargs) -> LiveService:
    defaults = dict(title='Sunday Worship', scheduled_start=datetime.utcnow() + timedelta(days=1), status='scheduled')
    defaults.update(kwargs)
    service = LiveService(**defaults)
    db_session.add(service)
    await db_session.commit()
    await db_session.refresh(service)
    return service


class TestServiceLookup:

    @pytest.mark.asyncio
    async def test_no_services(self, client: AsyncClient):
        response = await client.get('/api/v1/live/service')

        assert response.json() == {'service': None, 'message': 'No upcoming services'}

    @pytest.mark.asyncio
    async def test_live_service_preferred(self, client: AsyncClient, db_session):
        await schedule_service(db_session, title='Next week')
        await schedule_service(db_session, title='Happening now', status='live', scheduled_start=datetime.utcnow())

        response = await client.get('/api/v1/live/service')

        data = response.json()
        assert data['service']['title'] == 'Happening now'
        assert data['current_attendees'] == 0
        assert 'user_attending' not in data

    @pytest.mark.asyncio
    async def test_past_scheduled_ignored(self, client: AsyncClient, db_session):
        await schedule_service(db_session, scheduled_start=datetime.utcnow() - timedelta(days=1))

        response = await client.get('/api/v1/live/service')

        assert response.json()['service'] is None

    @pytest.mark.asyncio
    async def test_by_id_not_found(self, client: AsyncClient):
        response = await client.get(f'/api/v1/live/service?id={uuid.uuid4()}')

        assert response.status_code == 404


class TestAttendance:

    @pytest.mark.asyncio
    async def test_join_and_leave(self, client: AsyncClient, db_session, auth_headers):
        service = await schedule_service(db_session, status='live', scheduled_start=datetime.utcnow())

        joined = await client.post(
            '/api/v1/live/service', json={'service_id': service.id, 'action': 'join', 'device_type': 'mobile'},
            headers=auth_headers
        )
        rejoined = await client.post('/api/v1/live/service', json={'service_id': service.id, 'action': 'join'}, headers=auth_headers)
        status_while_in = (await client.get(f'/api/v1/live/service?id={service.id}', headers=auth_headers)).json()
        left = await client.post('/api/v1/live/service', json={'service_id': service.id, 'action': 'leave'}, headers=auth_headers)
        status_after = (await client.get(f'/api/v1/live/service?id={service.id}', headers=auth_headers)).json()

        assert joined.json() == {'success': True, 'action': 'joined', 'attendee_count': 1}
        assert rejoined.json()['attendee_count'] == 1
        assert status_while_in['user_attending'] is True
        assert status_while_in['current_attendees'] == 1
        assert left.json() == {'success': True, 'action': 'left'}
        assert status_after['user_attending'] is False
        assert status_after['current_attendees'] == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize('body', [{'action': 'join'}, {'service_id': 'x', 'action': 'wave'}])
    async def test_bad_requests(self, client: AsyncClient, auth_headers, body):
        response = await client.post('/api/v1/live/service', json=body, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_join_requires_auth(self, client: AsyncClient):
        response = await client.post('/api/v1/live/service', json={'service_id': 'x', 'action': 'join'})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_each_new_attendee_counted_once(self, client: AsyncClient, db_session, auth_headers):
        service = await schedule_service(db_session, status='live', scheduled_start=datetime.utcnow())
        second = await create_member(db_session)

        await client.post('/api/v1/live/service', json={'service_id': service.id, 'action': 'join'}, headers=auth_headers)
        await client.post('/api/v1/live/service', json={'service_id': service.id, 'action': 'join'}, headers=auth_headers)
        response = await client.post(
            '/api/v1/live/service', json={'service_id': service.id, 'action': 'join'}, headers=headers_for(second)
        )

        assert response.json()['attendee_count'] == 2

    @pytest.mark.asyncio
    async def test_join_when_row_already_exists(self, client: AsyncClient, db_session, test_member, auth_headers):
        service = await schedule_service(db_session, status='live', scheduled_start=datetime.utcnow())
        db_session.add(ServiceAttendance(
            service_id=service.id, member_id=test_member.id,
            joined_at=datetime.utcnow() - timedelta(minutes=5), left_at=datetime.utcnow(), device_type='tv',
        ))
        await db_session.commit()

        response = await client.post(
            '/api/v1/live/service', json={'service_id': service.id, 'action': 'join'}, headers=auth_headers
        )
        status_now = (await client.get(f'/api/v1/live/service?id={service.id}', headers=auth_headers)).json()

        assert response.status_code == 200
        assert response.json()['attendee_count'] == 0
        assert status_now['user_attending'] is True


class TestPolls:

    @pytest.mark.asyncio
    async def test_active_poll_shown_when_enabled(self, client: AsyncClient, db_session):
        service = await schedule_service(db_session, status='live', scheduled_start=datetime.utcnow(), poll_enabled=True)
        db_session.add(ServicePoll(service_id=service.id, question='Old question', options=['a', 'b'], is_active=False))
        db_session.add(ServicePoll(service_id=service.id, question='Which song next?', options=['Hymn', 'Chorus']))
        await db_session.commit()

        data = (await client.get('/api/v1/live/service')).json()

        assert data['active_poll']['question'] == 'Which song next?'
        assert data['active_poll']['options'] == ['Hymn', 'Chorus']

    @pytest.mark.asyncio
    async def test_no_poll_key_when_disabled(self, client: AsyncClient, db_session):
        await schedule_service(db_session, status='live', scheduled_start=datetime.utcnow())

        data = (await client.get('/api/v1/live/service')).json()

        assert 'active_poll' not in data
