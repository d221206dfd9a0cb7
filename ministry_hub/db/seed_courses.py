"""
Course Catalog Seed

Inserts the discipleship course catalog (courses, modules and lessons with
HTML bodies). Courses that already exist, matched by slug, are skipped, so
the seed can be run repeatedly.

Run with: python -m ministry_hub.db.seed_courses
"""
import asyncio
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ministry_hub.core.database import AsyncSessionLocal, init_db
from ministry_hub.core.logging_config import logger
from ministry_hub.models.course import Course, CourseModule, CourseLesson


# ==================== Catalog ====================

def _lesson(slug: str, name: str, minutes: int, html: str, preview: bool = False) -> Dict[str, Any]:
    return {
        "slug": slug,
        "name": name,
        "estimated_minutes": minutes,
        "is_preview": preview,
        "content_html": html.strip(),
    }


COURSE_CATALOG: List[Dict[str, Any]] = [
    {
        "slug": "new-believers-journey",
        "name": "New Believer's Journey",
        "description": (
            "Begin your walk with Christ with confidence. Covers salvation, water baptism, "
            "the Holy Spirit and your first steps in faith."
        ),
        "category": "discipleship",
        "difficulty_level": "beginner",
        "required_tier": "free",
        "estimated_hours": 2,
        "modules": [
            {
                "slug": "understanding-salvation",
                "name": "Understanding Salvation",
                "description": "What happened when you gave your life to Christ",
                "has_quiz": True,
                "lessons": [
                    _lesson("what-is-salvation", "What is Salvation?", 10, """
<h2>What is Salvation?</h2>
<p>Salvation is God's gift of eternal life through Jesus Christ. It is received by faith, not earned.</p>
<ul>
  <li><strong>Forgiven</strong> (1 John 1:9)</li>
  <li><strong>Made new</strong> (2 Corinthians 5:17)</li>
  <li><strong>Adopted as God's child</strong> (John 1:12)</li>
</ul>
<blockquote>"For by grace you have been saved through faith." - Ephesians 2:8</blockquote>
""", preview=True),
                    _lesson("your-new-identity", "Your New Identity in Christ", 12, """
<h2>Your New Identity in Christ</h2>
<p>Your identity is no longer based on what you have done but on what Christ has done for you.</p>
<ul>
  <li><strong>Chosen</strong> (Ephesians 1:4)</li>
  <li><strong>Loved</strong> (Romans 8:38-39)</li>
  <li><strong>Free from condemnation</strong> (Romans 8:1)</li>
</ul>
"""),
                    _lesson("assurance-of-salvation", "Assurance of Salvation", 10, """
<h2>Assurance of Salvation</h2>
<blockquote>"I write these things to you who believe ... that you may know that you have eternal life." - 1 John 5:13</blockquote>
<p>Your salvation rests on God's promise, not on your feelings.</p>
"""),
                ],
            },
            {
                "slug": "water-baptism",
                "name": "Water Baptism",
                "description": "Your first public declaration of faith",
                "lessons": [
                    _lesson("why-be-baptized", "Why Be Baptized?", 10, """
<h2>Why Be Baptized?</h2>
<p>Jesus commanded it (Matthew 28:19) and modelled it (Matthew 3:13-17). Baptism is an outward sign of an inward change.</p>
"""),
                    _lesson("preparing-for-baptism", "Preparing for Baptism", 8, """
<h2>Preparing for Baptism</h2>
<p>Talk with a pastor, prepare a short testimony and invite the people who have walked with you.</p>
"""),
                ],
            },
            {
                "slug": "the-holy-spirit",
                "name": "The Holy Spirit",
                "description": "Meet your Helper and Guide",
                "has_quiz": True,
                "lessons": [
                    _lesson("who-is-the-holy-spirit", "Who is the Holy Spirit?", 12, """
<h2>Who is the Holy Spirit?</h2>
<p>The Holy Spirit is a person, not a force. He comforts, teaches and guides (John 14:26).</p>
"""),
                    _lesson("the-spirits-work", "The Spirit's Work in Your Life", 10, """
<h2>The Spirit's Work in Your Life</h2>
<p>He produces fruit in you (Galatians 5:22-23) and empowers you to witness (Acts 1:8).</p>
"""),
                ],
            },
            {
                "slug": "first-steps",
                "name": "Your First Steps",
                "description": "Habits that build a lasting faith",
                "lessons": [
                    _lesson("daily-devotion", "Developing a Daily Devotion", 10, """
<h2>Developing a Daily Devotion</h2>
<p>Pick a time, a place and a plan. Start with ten minutes of Scripture and prayer.</p>
"""),
                    _lesson("finding-community", "Finding Community", 8, """
<h2>Finding Community</h2>
<p>Faith grows in relationship (Hebrews 10:24-25). Join a small group this month.</p>
"""),
                ],
            },
        ],
    },
    {
        "slug": "foundations-of-prayer",
        "name": "Foundations of Prayer",
        "description": (
            "Learn to communicate with God effectively: the basics of prayer, its different "
            "types, overcoming obstacles and building a consistent prayer life."
        ),
        "category": "discipleship",
        "difficulty_level": "beginner",
        "required_tier": "free",
        "estimated_hours": 3,
        "modules": [
            {
                "slug": "what-is-prayer",
                "name": "What is Prayer?",
                "description": "Prayer as relationship",
                "has_quiz": True,
                "lessons": [
                    _lesson("prayer-as-conversation", "Prayer as Conversation", 10, """
<h2>Prayer as Conversation</h2>
<p>Prayer is talking with God and listening to Him. It is a two-way relationship.</p>
""", preview=True),
                    _lesson("why-pray", "Why Pray?", 12, """
<h2>Why Pray?</h2>
<p>Jesus prayed often (Luke 5:16) and invites us to ask, seek and knock (Matthew 7:7).</p>
"""),
                ],
            },
            {
                "slug": "types-of-prayer",
                "name": "Types of Prayer",
                "description": "Praise, thanksgiving, petition and intercession",
                "lessons": [
                    _lesson("praise-and-worship", "Praise and Worship", 10, """
<h2>Praise and Worship</h2>
<p>Praise celebrates who God is (Psalm 100:4).</p>
"""),
                    _lesson("thanksgiving", "Thanksgiving", 8, """
<h2>Thanksgiving</h2>
<p>Give thanks in all circumstances (1 Thessalonians 5:18).</p>
"""),
                    _lesson("petition-and-intercession", "Petition and Intercession", 12, """
<h2>Petition and Intercession</h2>
<p>Bring your own needs and stand in the gap for others (1 Timothy 2:1).</p>
"""),
                ],
            },
            {
                "slug": "the-lords-prayer",
                "name": "The Lord's Prayer",
                "description": "Jesus' model for prayer",
                "has_quiz": True,
                "lessons": [
                    _lesson("jesus-model-prayer", "Jesus' Model Prayer", 15, """
<h2>Jesus' Model Prayer</h2>
<p>Matthew 6:9-13 gives a pattern: worship, surrender, provision, forgiveness and protection.</p>
"""),
                ],
            },
            {
                "slug": "building-prayer-life",
                "name": "Building a Prayer Life",
                "description": "Consistency over intensity",
                "lessons": [
                    _lesson("overcoming-obstacles", "Overcoming Obstacles", 10, """
<h2>Overcoming Obstacles</h2>
<p>Distraction, doubt and busyness are common. Name them and plan around them.</p>
"""),
                    _lesson("creating-a-rhythm", "Creating a Prayer Rhythm", 10, """
<h2>Creating a Prayer Rhythm</h2>
<p>Anchor prayer to daily moments: waking, meals and bedtime.</p>
"""),
                ],
            },
        ],
    },
    {
        "slug": "reading-your-bible",
        "name": "Reading Your Bible",
        "description": (
            "Discover how to read, understand and apply God's Word: Bible basics, "
            "study methods and practical tips for making Scripture come alive."
        ),
        "category": "bible-study",
        "difficulty_level": "beginner",
        "required_tier": "free",
        "estimated_hours": 2,
        "modules": [
            {
                "slug": "bible-basics",
                "name": "Bible Basics",
                "description": "How the Bible is put together",
                "has_quiz": True,
                "lessons": [
                    _lesson("what-is-the-bible", "What is the Bible?", 12, """
<h2>What is the Bible?</h2>
<p>Sixty-six books written over many centuries and inspired by God (2 Timothy 3:16).</p>
""", preview=True),
                    _lesson("navigating-scripture", "Navigating Scripture", 8, """
<h2>Navigating Scripture</h2>
<p>Books, chapters and verses. Learn the sections of the Old and New Testaments.</p>
"""),
                ],
            },
            {
                "slug": "how-to-read",
                "name": "How to Read the Bible",
                "description": "Simple study methods",
                "lessons": [
                    _lesson("soap-method", "The SOAP Method", 10, """
<h2>The SOAP Method</h2>
<p><strong>S</strong>cripture, <strong>O</strong>bservation, <strong>A</strong>pplication, <strong>P</strong>rayer.</p>
"""),
                    _lesson("asking-questions", "Asking Good Questions", 10, """
<h2>Asking Good Questions</h2>
<p>Who wrote it, to whom and why? What does it teach about God and about me?</p>
"""),
                ],
            },
            {
                "slug": "applying-scripture",
                "name": "Applying Scripture",
                "description": "From reading to living",
                "lessons": [
                    _lesson("being-a-doer", "Being a Doer of the Word", 10, """
<h2>Being a Doer of the Word</h2>
<p>Do not merely listen to the word. Do what it says (James 1:22).</p>
"""),
                    _lesson("memorizing-scripture", "Memorizing Scripture", 8, """
<h2>Memorizing Scripture</h2>
<p>Write a verse on a card, repeat it daily and review it weekly.</p>
"""),
                ],
            },
        ],
    },
]

# Announced courses without published content yet
PLACEHOLDER_COURSES: List[Dict[str, Any]] = [
    {"slug": "hearing-gods-voice", "name": "Hearing God's Voice", "category": "prophetic",
     "difficulty_level": "beginner", "required_tier": "partner", "estimated_hours": 4,
     "description": "Learn to recognize and respond to God's voice in your daily life."},
    {"slug": "walking-in-the-spirit", "name": "Walking in the Spirit", "category": "discipleship",
     "difficulty_level": "intermediate", "required_tier": "partner", "estimated_hours": 4,
     "description": "Learn to be led by the Spirit daily, bear spiritual fruit and live in the power of God."},
    {"slug": "fasting-that-works", "name": "Fasting That Works", "category": "discipleship",
     "difficulty_level": "beginner", "required_tier": "partner", "estimated_hours": 2,
     "description": "The biblical principles of fasting and how to fast effectively."},
    {"slug": "prophetic-foundations", "name": "Prophetic Foundations", "category": "prophetic",
     "difficulty_level": "intermediate", "required_tier": "covenant", "estimated_hours": 6,
     "description": "The biblical foundation for prophetic ministry and how to test prophetic words."},
    {"slug": "dreams-and-visions", "name": "Dreams & Visions", "category": "prophetic",
     "difficulty_level": "intermediate", "required_tier": "covenant", "estimated_hours": 5,
     "description": "Understand and interpret prophetic dreams, visions and common biblical symbols."},
    {"slug": "activating-your-gift", "name": "Activating Your Gift", "category": "prophetic",
     "difficulty_level": "advanced", "required_tier": "covenant", "estimated_hours": 8,
     "description": "Practical training on giving prophetic words, prophetic etiquette and growing in accuracy."},
    {"slug": "spiritual-warfare", "name": "Spiritual Warfare", "category": "ministry",
     "difficulty_level": "intermediate", "required_tier": "covenant", "estimated_hours": 5,
     "description": "Your authority in Christ, the armor of God and strategies for breakthrough."},
    {"slug": "servant-leadership", "name": "Servant Leadership 101", "category": "leadership",
     "difficulty_level": "beginner", "required_tier": "covenant", "estimated_hours": 4,
     "description": "Biblical leadership rooted in the example of Jesus."},
    {"slug": "building-ministry-teams", "name": "Building Ministry Teams", "category": "leadership",
     "difficulty_level": "intermediate", "required_tier": "covenant", "estimated_hours": 5,
     "description": "Develop, lead and multiply ministry teams with a healthy culture."},
]


# ==================== Seeding ====================

def build_course(data: Dict[str, Any], status: str = "published") -> Course:
    """Build a Course with its modules and lessons (not yet added to a session)"""
    course = Course(
        slug=data["slug"],
        name=data["name"],
        description=data.get("description"),
        category=data.get("category"),
        difficulty_level=data.get("difficulty_level", "beginner"),
        required_tier=data.get("required_tier", "free"),
        estimated_hours=data.get("estimated_hours"),
        has_certificate=True,
        status=status,
    )
    for module_order, module_data in enumerate(data.get("modules", []), start=1):
        module = CourseModule(
            slug=module_data["slug"],
            name=module_data["name"],
            description=module_data.get("description"),
            sequence_order=module_order,
            has_quiz=module_data.get("has_quiz", False),
        )
        for lesson_order, lesson_data in enumerate(module_data.get("lessons", []), start=1):
            module.lessons.append(CourseLesson(sequence_order=lesson_order, content_type="text", **lesson_data))
        course.modules.append(module)
    return course


async def seed_courses(session: AsyncSession) -> List[str]:
    """Insert catalog courses that are not present yet. Returns the created slugs."""
    existing = set((await session.execute(select(Course.slug))).scalars().all())

    created = []
    catalog = [(c, "published") for c in COURSE_CATALOG] + [(c, "draft") for c in PLACEHOLDER_COURSES]
    for data, status in catalog:
        if data["slug"] in existing:
            logger.info(f"[Seed] Course exists, skipping: {data['slug']}")
            continue
        session.add(build_course(data, status=status))
        created.append(data["slug"])

    await session.commit()
    logger.info(f"[Seed] Created {len(created)} courses")
    return created


async def main():
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_courses(session)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
