"""
Integration Tests for member self-service endpoints
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import select

from ministry_hub.models import Member, JournalEntry, Donation, Message


class TestProfile:

    @pytest.mark.asyncio
    async def test_update_profile(self, client: AsyncClient, test_member, auth_headers):
        response = await client.patch(
            '/api/v1/members/me',
            json={'bio': 'Worship team', 'sms_notifications': True},
            headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data['bio'] == 'Worship team'
        assert data['sms_notifications'] is True

    @pytest.mark.asyncio
    async def test_cannot_self_upgrade(self, client: AsyncClient, test_member, auth_headers):
        response = await client.patch(
            '/api/v1/members/me',
            json={'tier': 'covenant', 'role': 'admin'},
            headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()['tier'] == 'free'
        assert response.json()['role'] == 'member'

    @pytest.mark.asyncio
    async def test_tier_info(self, client: AsyncClient, partner_headers):
        response = await client.get('/api/v1/members/tier', headers=partner_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['tier'] == 'partner'
        assert data['accessible_tiers'] == ['free', 'member', 'partner']
        assert 'covenant' in data['all_benefits']


class TestDeleteAccount:

    @pytest.mark.asyncio
    async def test_requires_confirmation(self, client: AsyncClient, auth_headers):
        response = await client.request('DELETE', '/api/v1/members/me', json={}, headers=auth_headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_deletes_member_and_keeps_donations(self, client: AsyncClient, db_session, test_member, auth_headers):
        member_id = test_member.id
        db_session.add(JournalEntry(member_id=member_id, entry_type='reflection', content='x'))
        db_session.add(Donation(
            member_id=member_id, amount_cents=2500, donation_type='general',
            frequency='once', status='completed', reference='gift_keep',
            donor_email=test_member.email, donor_name='Grace Member',
        ))
        db_session.add(Message(
            conversation_id='c0ffee00-0000-4000-8000-000000000001', sender_id=member_id,
            sender_type='member', recipient_type='admin', message='private pastoral matter',
        ))
        db_session.add(Message(
            conversation_id='c0ffee00-0000-4000-8000-000000000001', recipient_id=member_id,
            sender_type='admin', recipient_type='member', message='we are praying with you',
        ))
        await db_session.commit()

        response = await client.request(
            'DELETE', '/api/v1/members/me', json={'confirm': 'DELETE'}, headers=auth_headers
        )

        assert response.status_code == 200
        db_session.expire_all()
        assert (await db_session.execute(select(Member).where(Member.id == member_id))).scalar_one_or_none() is None
        assert (await db_session.execute(select(JournalEntry))).scalars().all() == []
        donation = (await db_session.execute(select(Donation))).scalar_one()
        assert donation.member_id is None
        assert donation.donor_email is None
        assert donation.donor_name == 'Deleted User'
        assert (await db_session.execute(select(Message))).scalars().all() == []
