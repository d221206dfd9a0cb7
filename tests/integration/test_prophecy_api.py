"""
Integration Tests for personal prophecy tracking and the public archive
"""
from datetime import datetime, timedelta
import uuid

import pytest
from httpx import AsyncClient

from ministry_hub.models import PersonalProphecy, PublicProphecy, ProphecyPrayerRequest
from tests.conftest import create_member


async def give_prophecy(db_session, member, **kwargs) -> PersonalProphecy:
    defaults = dict(
        member_id=member.id, title='A season of harvest', transcript='I see fields ready...',
        themes=['harvest', 'provision'],
    )
    defaults.update(kwargs)
    prophecy = PersonalProphecy(**defaults)
    db_session.add(prophecy)
    await db_session.commit()
    await db_session.refresh(prophecy)
    return prophecy


class TestMemberProphecies:

    @pytest.mark.asyncio
    async def test_lists_own_only(self, client: AsyncClient, db_session, test_member, auth_headers):
        await give_prophecy(db_session, test_member)
        await give_prophecy(db_session, await create_member(db_session), title='Not yours')

        response = await client.get('/api/v1/prophecy/member', headers=auth_headers)

        assert [p['title'] for p in response.json()['prophecies']] == ['A season of harvest']

    @pytest.mark.asyncio
    async def test_theme_filter(self, client: AsyncClient, db_session, test_member, auth_headers):
        await give_prophecy(db_session, test_member)
        await give_prophecy(db_session, test_member, title='Healing', themes=['healing'])

        response = await client.get('/api/v1/prophecy/member?theme=healing', headers=auth_headers)

        assert [p['title'] for p in response.json()['prophecies']] == ['Healing']


class TestTracking:

    @pytest.mark.asyncio
    async def test_update_tracking(self, client: AsyncClient, db_session, test_member, auth_headers):
        prophecy = await give_prophecy(db_session, test_member)

        response = await client.put('/api/v1/prophecy/tracking', json={
            'prophecy_id': prophecy.id,
            'member_journal': 'Started seeing this',
            'fulfillment_status': 'partially_fulfilled',
            'manifested_date': '2024-05-01T12:00:00Z',
            'member_tags': 'career, family',
        }, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['fulfillment_status'] == 'partially_fulfilled'
        assert data['member_tags'] == ['career', 'family']
        assert data['manifested_date'].startswith('2024-05-01T12:00:00')

    @pytest.mark.asyncio
    async def test_missing_id(self, client: AsyncClient, auth_headers):
        response = await client.put('/api/v1/prophecy/tracking', json={}, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_prophecy(self, client: AsyncClient, auth_headers):
        response = await client.put('/api/v1/prophecy/tracking', json={'prophecy_id': str(uuid.uuid4())}, headers=auth_headers)

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_other_members_prophecy(self, client: AsyncClient, db_session, auth_headers):
        prophecy = await give_prophecy(db_session, await create_member(db_session))

        response = await client.put('/api/v1/prophecy/tracking', json={'prophecy_id': prophecy.id}, headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_status(self, client: AsyncClient, db_session, test_member, auth_headers):
        prophecy = await give_prophecy(db_session, test_member)

        response = await client.put('/api/v1/prophecy/tracking', json={
            'prophecy_id': prophecy.id, 'fulfillment_status': 'done',
        }, headers=auth_headers)

        assert response.status_code == 422
        assert 'fulfilled' in response.json()['error']['details']['allowed']


class TestPublicArchive:

    @pytest.mark.asyncio
    async def test_visibility_rules(self, client: AsyncClient, db_session):
        now = datetime.utcnow()
        db_session.add_all([
            PublicProphecy(title='Published', theme='revival', transcript='...', status='published', date=now - timedelta(days=3)),
            PublicProphecy(title='Due', theme='revival', transcript='...', status='scheduled', date=now - timedelta(hours=1)),
            PublicProphecy(title='Future', theme='revival', transcript='...', status='scheduled', date=now + timedelta(days=2)),
            PublicProphecy(title='Draft', theme='revival', transcript='...', status='draft', date=now),
        ])
        await db_session.commit()

        response = await client.get('/api/v1/prophecy/public')

        assert response.status_code == 200
        data = response.json()
        assert [p['title'] for p in data['prophecies']] == ['Due', 'Published']
        assert data['total'] == 2
        assert data['limit'] == 20

    @pytest.mark.asyncio
    async def test_listing_omits_transcript(self, client: AsyncClient, db_session):
        db_session.add(PublicProphecy(
            title='For covenant partners', theme='revival', transcript='Covenant-only word',
            excerpt='A word for partners...', tier_required='covenant', status='published',
        ))
        await db_session.commit()

        response = await client.get('/api/v1/prophecy/public')

        item = response.json()['prophecies'][0]
        assert 'transcript' not in item
        assert item['excerpt'] == 'A word for partners...'
        assert item['tier_required'] == 'covenant'


class TestPrayerRequests:

    @pytest.mark.asyncio
    async def test_submit_and_list_own(self, client: AsyncClient, db_session, auth_headers):
        other = await create_member(db_session)
        db_session.add(ProphecyPrayerRequest(member_id=other.id, category='health', request_text='Not mine'))
        await db_session.commit()

        created = await client.post('/api/v1/prophecy/prayer-request', json={
            'category': 'family', 'request_text': 'Pray for my household',
        }, headers=auth_headers)
        listed = await client.get('/api/v1/prophecy/prayer-request', headers=auth_headers)

        assert created.status_code == 201
        assert created.json()['data']['status'] == 'pending'
        assert [r['request_text'] for r in listed.json()['requests']] == ['Pray for my household']

    @pytest.mark.asyncio
    @pytest.mark.parametrize('payload', [{'category': 'family'}, {'request_text': 'x'}, {'category': ' ', 'request_text': 'x'}])
    async def test_required_fields(self, client: AsyncClient, auth_headers, payload):
        response = await client.post('/api/v1/prophecy/prayer-request', json=payload, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post('/api/v1/prophecy/prayer-request', json={'category': 'x', 'request_text': 'y'})

        assert response.status_code == 401
