"""
Integration Tests for admin content management
"""
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ministry_hub.models import AuditLog


class TestContentAccess:

    @pytest.mark.asyncio
    async def test_members_forbidden(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/admin/content', headers=auth_headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invalid_content_type(self, client: AsyncClient, staff_headers):
        response = await client.get('/api/v1/admin/content?content_type=podcast', headers=staff_headers)

        assert response.status_code == 422
        assert response.json()['error']['code'] == 'INVALID_CHOICE'


class TestContentCrud:

    @pytest.mark.asyncio
    async def test_create_teaching_is_audited(self, client: AsyncClient, db_session, staff_member, staff_headers):
        response = await client.post('/api/v1/admin/content/teaching', json={
            'title': 'The Armor of God', 'tier_required': 'member', 'tags': ['warfare'],
        }, headers=staff_headers)

        assert response.status_code == 201
        data = response.json()
        assert data['tier_required'] == 'member'
        assert data['is_published'] is False

        log = (await db_session.execute(select(AuditLog))).scalar_one()
        assert log.action == 'teaching_created'
        assert log.admin_id == staff_member.id
        assert log.entity_id == data['id']

    @pytest.mark.asyncio
    async def test_create_validates_body(self, client: AsyncClient, staff_headers):
        response = await client.post('/api/v1/admin/content/sermon', json={'title': ''}, headers=staff_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_and_publish_resource(self, client: AsyncClient, staff_headers):
        created = (await client.post(
            '/api/v1/admin/content/resource', json={'title': 'Prayer Guide'}, headers=staff_headers
        )).json()

        updated = await client.patch(
            f"/api/v1/admin/content/resource/{created['id']}", json={'author': 'Elder Kim'}, headers=staff_headers
        )
        published = await client.post(f"/api/v1/admin/content/resource/{created['id']}/publish", headers=staff_headers)
        unpublished = await client.post(f"/api/v1/admin/content/resource/{created['id']}/publish", headers=staff_headers)

        assert updated.json()['author'] == 'Elder Kim'
        assert published.json()['published'] is True
        assert unpublished.json()['published'] is False

    @pytest.mark.asyncio
    async def test_list_filters(self, client: AsyncClient, staff_headers):
        for title in ('Hope Rising', 'Faith Works'):
            item = (await client.post('/api/v1/admin/content/teaching', json={'title': title}, headers=staff_headers)).json()
        await client.post(f"/api/v1/admin/content/teaching/{item['id']}/publish", headers=staff_headers)

        published = await client.get('/api/v1/admin/content?content_type=teaching&published=true', headers=staff_headers)
        search = await client.get('/api/v1/admin/content?content_type=teaching&search=hope', headers=staff_headers)

        assert [t['title'] for t in published.json()['items']] == ['Faith Works']
        assert [t['title'] for t in search.json()['items']] == ['Hope Rising']

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, client: AsyncClient, staff_headers, admin_headers):
        created = (await client.post('/api/v1/admin/content/sermon', json={'title': 'Easter'}, headers=staff_headers)).json()

        as_staff = await client.delete(f"/api/v1/admin/content/sermon/{created['id']}", headers=staff_headers)
        as_admin = await client.delete(f"/api/v1/admin/content/sermon/{created['id']}", headers=admin_headers)
        missing = await client.delete(f"/api/v1/admin/content/sermon/{created['id']}", headers=admin_headers)

        assert as_staff.status_code == 403
        assert as_admin.json() == {'success': True}
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_update_unknown_item(self, client: AsyncClient, staff_headers):
        response = await client.patch(f'/api/v1/admin/content/teaching/{uuid.uuid4()}', json={}, headers=staff_headers)

        assert response.status_code == 404
