"""
Integration Tests for household management
"""
import pytest
from httpx import AsyncClient

from tests.conftest import create_member, headers_for


async def start_family(client, headers):
    response = await client.post('/api/v1/family', json={'family_name': 'The Okafors', 'city': 'Austin'}, headers=headers)
    assert response.status_code == 201
    return response.json()


class TestFamily:

    @pytest.mark.asyncio
    async def test_no_family(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/family', headers=auth_headers)

        assert response.json() == {'family': None, 'members': [], 'invites': [], 'is_head': False}

    @pytest.mark.asyncio
    async def test_create_family_makes_head(self, client: AsyncClient, test_member, auth_headers):
        await start_family(client, auth_headers)

        response = await client.get('/api/v1/family', headers=auth_headers)

        data = response.json()
        assert data['family']['family_name'] == 'The Okafors'
        assert data['is_head'] is True
        assert data['members'][0]['member_id'] == test_member.id
        assert data['members'][0]['relationship'] == 'self'

    @pytest.mark.asyncio
    async def test_cannot_create_second_family(self, client: AsyncClient, auth_headers):
        await start_family(client, auth_headers)

        response = await client.post('/api/v1/family', json={'family_name': 'Again'}, headers=auth_headers)

        assert response.status_code == 409


class TestInvites:

    @pytest.mark.asyncio
    async def test_invite_and_accept(self, client: AsyncClient, db_session, auth_headers):
        await start_family(client, auth_headers)
        spouse = await create_member(db_session, email='spouse@example.com')

        invite = await client.post(
            '/api/v1/family/invites', json={'email': 'Spouse@Example.com', 'relationship': 'spouse'}, headers=auth_headers
        )
        duplicate = await client.post(
            '/api/v1/family/invites', json={'email': 'spouse@example.com', 'relationship': 'spouse'}, headers=auth_headers
        )
        accepted = await client.post(f"/api/v1/family/invites/{invite.json()['id']}/accept", headers=headers_for(spouse))

        assert invite.status_code == 201
        assert invite.json()['email'] == 'spouse@example.com'
        assert duplicate.status_code == 409
        assert accepted.json()['success'] is True

        family = (await client.get('/api/v1/family', headers=auth_headers)).json()
        assert len(family['members']) == 2
        assert family['invites'] == []

    @pytest.mark.asyncio
    async def test_accept_wrong_email(self, client: AsyncClient, db_session, auth_headers):
        await start_family(client, auth_headers)
        stranger = await create_member(db_session)
        invite = await client.post(
            '/api/v1/family/invites', json={'email': 'someone@example.com', 'relationship': 'sibling'}, headers=auth_headers
        )

        response = await client.post(f"/api/v1/family/invites/{invite.json()['id']}/accept", headers=headers_for(stranger))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_invite_requires_family(self, client: AsyncClient, auth_headers):
        response = await client.post(
            '/api/v1/family/invites', json={'email': 'x@example.com', 'relationship': 'sibling'}, headers=auth_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_cancel_invite(self, client: AsyncClient, auth_headers):
        await start_family(client, auth_headers)
        invite = await client.post(
            '/api/v1/family/invites', json={'email': 'x@example.com', 'relationship': 'sibling'}, headers=auth_headers
        )

        response = await client.delete(f"/api/v1/family/invites/{invite.json()['id']}", headers=auth_headers)

        assert response.json() == {'success': True}
        assert (await client.get('/api/v1/family', headers=auth_headers)).json()['invites'] == []


class TestChildren:

    @pytest.mark.asyncio
    async def test_add_and_remove_child(self, client: AsyncClient, auth_headers):
        await start_family(client, auth_headers)

        child = await client.post(
            '/api/v1/family/children', json={'first_name': 'Ada', 'last_name': 'Okafor', 'birth_date': '2018-04-02'},
            headers=auth_headers
        )
        assert child.status_code == 201

        family = (await client.get('/api/v1/family', headers=auth_headers)).json()
        kid = next(m for m in family['members'] if m['is_child'])
        assert kid['first_name'] == 'Ada'
        assert kid['email'] is None

        removed = await client.delete(f"/api/v1/family/members/{kid['id']}", headers=auth_headers)
        assert removed.json() == {'success': True}

    @pytest.mark.asyncio
    async def test_head_cannot_remove_self(self, client: AsyncClient, auth_headers):
        await start_family(client, auth_headers)
        family = (await client.get('/api/v1/family', headers=auth_headers)).json()

        response = await client.delete(f"/api/v1/family/members/{family['members'][0]['id']}", headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_only_head_removes(self, client: AsyncClient, db_session, auth_headers):
        await start_family(client, auth_headers)
        spouse = await create_member(db_session, email='partner@example.com')
        invite = await client.post(
            '/api/v1/family/invites', json={'email': 'partner@example.com', 'relationship': 'spouse'}, headers=auth_headers
        )
        await client.post(f"/api/v1/family/invites/{invite.json()['id']}/accept", headers=headers_for(spouse))
        family = (await client.get('/api/v1/family', headers=auth_headers)).json()
        head_row = next(m for m in family['members'] if m['is_primary'])

        response = await client.delete(f"/api/v1/family/members/{head_row['id']}", headers=headers_for(spouse))

        assert response.status_code == 403
