"""
Integration Tests for authentication endpoints
"""
import pytest
from httpx import AsyncClient

from ministry_hub.core.security import create_refresh_token, token_payload_for
from tests.conftest import TEST_PASSWORD, create_member, headers_for


class TestRegistration:

    @pytest.mark.asyncio
    async def test_register_member(self, client: AsyncClient, test_member_data):
        response = await client.post('/api/v1/auth/register', json=test_member_data)

        assert response.status_code == 201
        data = response.json()
        assert data['email'] == test_member_data['email'].lower()
        assert data['tier'] == 'free'
        assert data['role'] == 'member'
        assert 'hashed_password' not in data

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_member_data):
        await client.post('/api/v1/auth/register', json=test_member_data)

        response = await client.post('/api/v1/auth/register', json=test_member_data)

        assert response.status_code == 400
        assert response.json()['detail'] == 'Email already registered'

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient, test_member_data):
        test_member_data['password'] = 'short'

        response = await client.post('/api/v1/auth/register', json=test_member_data)

        assert response.status_code == 422


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_member):
        response = await client.post(
            '/api/v1/auth/login',
            json={'email': test_member.email, 'password': TEST_PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data['token_type'] == 'bearer'
        assert data['access_token']
        assert data['refresh_token']
        assert data['member']['id'] == test_member.id
        assert data['member']['last_login'] is not None

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_member):
        response = await client.post(
            '/api/v1/auth/login',
            json={'email': test_member.email, 'password': 'wrong-password'}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_inactive_member(self, client: AsyncClient, db_session):
        member = await create_member(db_session, is_active=False)

        response = await client.post(
            '/api/v1/auth/login',
            json={'email': member.email, 'password': TEST_PASSWORD}
        )

        assert response.status_code == 403


class TestTokens:

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, test_member, auth_headers):
        response = await client.get('/api/v1/auth/me', headers=auth_headers)

        assert response.status_code == 200
        assert response.json()['email'] == test_member.email

    @pytest.mark.asyncio
    async def test_me_requires_auth(self, client: AsyncClient):
        response = await client.get('/api/v1/auth/me')

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get('/api/v1/auth/me', headers={'Authorization': 'Bearer garbage'})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh(self, client: AsyncClient, test_member):
        refresh = create_refresh_token(token_payload_for(test_member))

        response = await client.post('/api/v1/auth/refresh', json={'refresh_token': refresh})

        assert response.status_code == 200
        assert response.json()['access_token']

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, client: AsyncClient, test_member):
        access = headers_for(test_member)['Authorization'].split(' ', 1)[1]

        response = await client.post('/api/v1/auth/refresh', json={'refresh_token': access})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_token_cannot_authenticate(self, client: AsyncClient, test_member):
        refresh = create_refresh_token(token_payload_for(test_member))

        response = await client.get('/api/v1/auth/me', headers={'Authorization': f'Bearer {refresh}'})

        assert response.status_code == 401
