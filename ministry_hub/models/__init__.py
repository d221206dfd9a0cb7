# Re-export all models for convenient imports
from ministry_hub.models.member import Member, MemberTier, MemberRole
from ministry_hub.models.content import Teaching, Sermon, Resource
from ministry_hub.models.engagement import TeachingProgress, TeachingBookmark, WatchlistItem
from ministry_hub.models.journal import JournalEntry, JournalEntryType
from ministry_hub.models.prophecy import (
    PersonalProphecy,
    PublicProphecy,
    FulfillmentStatus,
    PublicProphecyStatus,
    ProphecyPrayerRequest,
    PrayerRequestStatus,
)
from ministry_hub.models.lead import Lead, LeadActivity, LeadStatus, LeadPriority
from ministry_hub.models.message import Message, ParticipantType
from ministry_hub.models.family import Family, FamilyMember, FamilyInvite, InviteStatus
from ministry_hub.models.donation import (
    Donation,
    DonationType,
    DonationFrequency,
    DonationStatus,
    DONATION_TYPE_LABELS,
)
from ministry_hub.models.live_service import LiveService, ServiceAttendance, ServicePoll, LiveServiceStatus
from ministry_hub.models.course import Course, CourseModule, CourseLesson
from ministry_hub.models.audit_log import AuditLog

__all__ = [
    # Members
    "Member",
    "MemberTier",
    "MemberRole",
    # Library content
    "Teaching",
    "Sermon",
    "Resource",
    "TeachingProgress",
    "TeachingBookmark",
    "WatchlistItem",
    # Journal
    "JournalEntry",
    "JournalEntryType",
    # Prophecy
    "PersonalProphecy",
    "PublicProphecy",
    "FulfillmentStatus",
    "PublicProphecyStatus",
    "ProphecyPrayerRequest",
    "PrayerRequestStatus",
    # Leads
    "Lead",
    "LeadActivity",
    "LeadStatus",
    "LeadPriority",
    # Messages
    "Message",
    "ParticipantType",
    # Family
    "Family",
    "FamilyMember",
    "FamilyInvite",
    "InviteStatus",
    # Giving
    "Donation",
    "DonationType",
    "DonationFrequency",
    "DonationStatus",
    "DONATION_TYPE_LABELS",
    # Live services
    "LiveService",
    "ServiceAttendance",
    "ServicePoll",
    "LiveServiceStatus",
    # Courses
    "Course",
    "CourseModule",
    "CourseLesson",
    # Admin
    "AuditLog",
]
