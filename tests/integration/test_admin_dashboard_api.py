"""
Integration Tests for the admin dashboard and audit log
"""
from datetime import datetime, timedelta

import pytest
from httpx import AsyncClient

from ministry_hub.models import Donation, Lead, LiveService, Teaching


class TestDashboard:

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, db_session, test_member, auth_headers, staff_headers):
        now = datetime.utcnow()
        db_session.add_all([
            Lead(name='New lead', status='new'),
            Lead(name='Old friend', status='converted'),
            Donation(amount_cents=12345, status='completed', reference='gift_dash', completed_at=now),
            Teaching(title='Published', is_published=True),
            Teaching(title='Draft', is_published=False),
            LiveService(title='Midweek', scheduled_start=now + timedelta(days=2), status='scheduled'),
        ])
        await db_session.commit()
        await client.post('/api/v1/messages', json={'message': 'hello'}, headers=auth_headers)

        response = await client.get('/api/v1/admin/dashboard/stats', headers=staff_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['members']['total'] == 2
        assert data['members']['by_tier']['free'] == 2
        assert data['leads']['by_status']['new'] == 1
        assert data['leads']['by_status']['converted'] == 1
        assert data['leads']['new_this_week'] == 2
        assert data['unread_messages'] == 1
        assert data['donations']['completed_total'] == 123.45
        assert data['content'] == {'teachings': 1, 'sermons': 0, 'resources': 0}
        assert data['upcoming_service']['title'] == 'Midweek'

    @pytest.mark.asyncio
    async def test_members_forbidden(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/admin/dashboard/stats', headers=auth_headers)

        assert response.status_code == 403


class TestAuditLogs:

    @pytest.mark.asyncio
    async def test_admin_sees_actions(self, client: AsyncClient, staff_member, staff_headers, admin_headers):
        await client.post('/api/v1/admin/content/teaching', json={'title': 'One'}, headers=staff_headers)
        await client.post('/api/v1/admin/leads', json={'name': 'Lead'}, headers=staff_headers)

        everything = await client.get('/api/v1/admin/audit-logs', headers=admin_headers)
        leads_only = await client.get('/api/v1/admin/audit-logs?entity_type=lead', headers=admin_headers)
        by_staff = await client.get(f'/api/v1/admin/audit-logs?admin_id={staff_member.id}', headers=admin_headers)

        assert everything.json()['total'] == 2
        assert [log['action'] for log in leads_only.json()['items']] == ['lead_created']
        assert by_staff.json()['total'] == 2

    @pytest.mark.asyncio
    async def test_staff_forbidden(self, client: AsyncClient, staff_headers):
        response = await client.get('/api/v1/admin/audit-logs', headers=staff_headers)

        assert response.status_code == 403
