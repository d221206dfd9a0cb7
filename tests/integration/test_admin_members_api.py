"""
Integration Tests for admin member management
"""
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ministry_hub.models import AuditLog, MemberTier
from tests.conftest import create_member


class TestMemberList:

    @pytest.mark.asyncio
    async def test_staff_can_list(self, client: AsyncClient, db_session, staff_headers):
        await create_member(db_session, first_name='Priscilla', tier=MemberTier.PARTNER)
        await create_member(db_session, first_name='Aquila')

        everyone = await client.get('/api/v1/admin/members', headers=staff_headers)
        partners = await client.get('/api/v1/admin/members?tier=partner', headers=staff_headers)
        search = await client.get('/api/v1/admin/members?search=aquila', headers=staff_headers)

        assert everyone.json()['total'] == 3
        assert [m['first_name'] for m in partners.json()['items']] == ['Priscilla']
        assert [m['first_name'] for m in search.json()['items']] == ['Aquila']

    @pytest.mark.asyncio
    async def test_members_forbidden(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/admin/members', headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_get_unknown(self, client: AsyncClient, staff_headers):
        response = await client.get(f'/api/v1/admin/members/{uuid.uuid4()}', headers=staff_headers)

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'MEMBER_NOT_FOUND'


class TestMemberUpdate:

    @pytest.mark.asyncio
    async def test_admin_changes_tier(self, client: AsyncClient, db_session, test_member, admin_headers):
        response = await client.patch(
            f'/api/v1/admin/members/{test_member.id}', json={'tier': 'covenant'}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()['tier'] == 'covenant'

        log = (await db_session.execute(select(AuditLog))).scalar_one()
        assert log.action == 'member_updated'
        assert log.details == {'tier': {'old': 'free', 'new': 'covenant'}}

    @pytest.mark.asyncio
    async def test_no_change_not_audited(self, client: AsyncClient, db_session, test_member, admin_headers):
        await client.patch(f'/api/v1/admin/members/{test_member.id}', json={'tier': 'free'}, headers=admin_headers)

        assert (await db_session.execute(select(AuditLog))).scalars().all() == []

    @pytest.mark.asyncio
    async def test_staff_cannot_update(self, client: AsyncClient, test_member, staff_headers):
        response = await client.patch(f'/api/v1/admin/members/{test_member.id}', json={'tier': 'covenant'}, headers=staff_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_tier(self, client: AsyncClient, test_member, admin_headers):
        response = await client.patch(f'/api/v1/admin/members/{test_member.id}', json={'tier': 'gold'}, headers=admin_headers)

        assert response.status_code == 422


class TestBulkActions:

    @pytest.mark.asyncio
    async def test_suspend_skips_self(self, client: AsyncClient, db_session, admin_member, admin_headers):
        others = [await create_member(db_session) for _ in range(2)]
        ids = [m.id for m in others] + [admin_member.id]

        response = await client.post(
            '/api/v1/admin/members/bulk', json={'member_ids': ids, 'action': 'suspend'}, headers=admin_headers
        )

        assert response.json() == {'success': True, 'affected': 2}
        assert all(not m.is_active for m in others)
        assert admin_member.is_active is True

    @pytest.mark.asyncio
    async def test_change_tier(self, client: AsyncClient, db_session, admin_headers):
        member = await create_member(db_session)

        response = await client.post('/api/v1/admin/members/bulk', json={
            'member_ids': [member.id], 'action': 'change_tier', 'tier': 'member',
        }, headers=admin_headers)

        assert response.json()['affected'] == 1
        assert member.tier == 'member'

        log = (await db_session.execute(select(AuditLog))).scalar_one()
        assert log.action == 'bulk_change_tier'
        assert log.entity_id is None

    @pytest.mark.asyncio
    async def test_change_tier_needs_tier(self, client: AsyncClient, test_member, admin_headers):
        response = await client.post('/api/v1/admin/members/bulk', json={
            'member_ids': [test_member.id], 'action': 'change_tier',
        }, headers=admin_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_empty_ids(self, client: AsyncClient, admin_headers):
        response = await client.post('/api/v1/admin/members/bulk', json={'member_ids': [], 'action': 'activate'}, headers=admin_headers)

        assert response.status_code == 422
