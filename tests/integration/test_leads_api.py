"""
Integration Tests for the public connect form
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ministry_hub.models import Lead


class TestConnectForm:

    @pytest.mark.asyncio
    async def test_submission_creates_lead(self, client: AsyncClient, db_session):
        response = await client.post('/api/v1/leads', json={
            'name': '  Jordan Visitor ',
            'email': 'Jordan@Example.com',
            'phone': '555-0100',
            'interests': ['small groups'],
            'message': 'First time visiting',
        })

        assert response.status_code == 201
        assert response.json()['success'] is True

        lead = (await db_session.execute(select(Lead))).scalar_one()
        assert lead.name == 'Jordan Visitor'
        assert lead.email == 'jordan@example.com'
        assert lead.source == 'website'
        assert lead.status == 'new'
        assert lead.notes == 'First time visiting'

    @pytest.mark.asyncio
    async def test_requires_email(self, client: AsyncClient):
        response = await client.post('/api/v1/leads', json={'name': 'Jordan'})

        assert response.status_code == 422
