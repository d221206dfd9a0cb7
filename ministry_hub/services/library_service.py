"""
Unified library aggregation.

Normalizes teachings, resources and sermons into one item shape, then applies
tab, tag and sort filters and builds stats, tag cloud and curated shelves.
Everything here works on plain objects already loaded from the database, so it
can be exercised without a session.
"""

from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ministry_hub.services.tiers import has_tier_access, normalize_tier

LIBRARY_TABS = ("all", "videos", "audio", "ebooks", "progress", "watchlist")
LIBRARY_SORTS = ("newest", "oldest", "title", "popular")

WatchKey = Tuple[str, str]


@dataclass
class LibraryItem:
    id: str
    source: str  # teaching, resource, sermon
    type: str  # video, audio, article, ebook, sermon
    title: str
    description: Optional[str]
    author: Optional[str]
    thumbnail_url: Optional[str]
    tier_required: str
    has_access: bool
    tags: List[str]
    created_at: Optional[datetime]
    href: str
    duration_minutes: Optional[int] = None
    series_name: Optional[str] = None
    is_featured: bool = False
    popularity: int = 0
    progress_percent: int = 0
    completed: bool = False
    last_accessed: Optional[datetime] = None
    in_watchlist: bool = False
    download_count: Optional[int] = None
    sermon_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _lower_tags(tags: Optional[Iterable[str]]) -> List[str]:
    return [str(t).lower() for t in (tags or []) if t]


def teaching_type(teaching) -> str:
    if teaching.video_url:
        return "video"
    if teaching.audio_url:
        return "audio"
    return "article"


def progress_percent(progress_seconds: Optional[int], duration_minutes: Optional[int]) -> int:
    """Share of the teaching watched, clamped to 0..100"""
    if not progress_seconds or not duration_minutes:
        return 0
    percent = round(progress_seconds / (duration_minutes * 60) * 100)
    return max(0, min(100, percent))


def normalize_teaching(teaching, progress, member_tier: str, is_admin: bool,
                       watch_keys: set) -> LibraryItem:
    teaching_id = str(teaching.id)
    return LibraryItem(
        id=teaching_id,
        source="teaching",
        type=teaching_type(teaching),
        title=teaching.title,
        description=teaching.description,
        author=teaching.speaker,
        thumbnail_url=teaching.thumbnail_url,
        tier_required=normalize_tier(teaching.tier_required),
        has_access=has_tier_access(member_tier, teaching.tier_required, is_admin),
        tags=_lower_tags(teaching.tags),
        created_at=teaching.created_at,
        href=f"/content/{teaching_id}",
        duration_minutes=teaching.duration_minutes,
        series_name=teaching.series_name,
        is_featured=bool(teaching.is_featured),
        popularity=teaching.view_count or 0,
        progress_percent=progress_percent(
            progress.progress_seconds if progress else 0, teaching.duration_minutes
        ),
        completed=bool(progress.completed) if progress else False,
        last_accessed=progress.last_watched_at if progress else None,
        in_watchlist=(teaching_id, "teaching") in watch_keys,
    )


def normalize_resource(resource, member_tier: str, is_admin: bool, watch_keys: set) -> LibraryItem:
    resource_id = str(resource.id)
    return LibraryItem(
        id=resource_id,
        source="resource",
        type="ebook",
        title=resource.title,
        description=resource.description,
        author=resource.author,
        thumbnail_url=resource.thumbnail_url,
        tier_required=normalize_tier(resource.tier_required),
        has_access=has_tier_access(member_tier, resource.tier_required, is_admin),
        tags=_lower_tags(resource.tags),
        created_at=resource.created_at,
        href=f"/ebooks/{resource_id}",
        is_featured=bool(resource.is_featured),
        popularity=resource.download_count or 0,
        download_count=resource.download_count or 0,
        in_watchlist=(resource_id, "resource") in watch_keys,
    )


def normalize_sermon(sermon, watch_keys: set) -> LibraryItem:
    sermon_id = str(sermon.id)
    return LibraryItem(
        id=sermon_id,
        source="sermon",
        type="sermon",
        title=sermon.title,
        description=sermon.description,
        author=sermon.speaker,
        thumbnail_url=sermon.thumbnail_url,
        tier_required="free",
        has_access=True,
        tags=_lower_tags(sermon.tags),
        created_at=sermon.created_at,
        href="/sermons",
        duration_minutes=sermon.duration_minutes,
        series_name=sermon.series_name,
        is_featured=bool(sermon.is_featured),
        popularity=sermon.view_count or 0,
        sermon_date=sermon.sermon_date,
        in_watchlist=(sermon_id, "sermon") in watch_keys,
    )


def build_items(
    teachings: Iterable,
    resources: Iterable,
    sermons: Iterable,
    progress_rows: Iterable,
    watchlist_rows: Iterable,
    member_tier: Optional[str],
    is_admin: bool = False,
) -> List[LibraryItem]:
    """Normalize every source into LibraryItems"""
    tier = normalize_tier(member_tier)
    progress_by_teaching = {str(p.teaching_id): p for p in progress_rows}
    watch_keys = {(str(w.content_id), w.content_type) for w in watchlist_rows}

    items: List[LibraryItem] = []
    for teaching in teachings:
        items.append(normalize_teaching(
            teaching, progress_by_teaching.get(str(teaching.id)), tier, is_admin, watch_keys
        ))
    for resource in resources:
        items.append(normalize_resource(resource, tier, is_admin, watch_keys))
    for sermon in sermons:
        items.append(normalize_sermon(sermon, watch_keys))
    return items


def filter_by_tab(items: List[LibraryItem], tab: str) -> List[LibraryItem]:
    if tab == "videos":
        return [i for i in items if i.type in ("video", "sermon")]
    if tab == "audio":
        return [i for i in items if i.type == "audio"]
    if tab == "ebooks":
        return [i for i in items if i.type == "ebook"]
    if tab == "progress":
        return [i for i in items if i.progress_percent > 0 or i.completed or i.last_accessed]
    if tab == "watchlist":
        return [i for i in items if i.in_watchlist]
    return list(items)


def filter_by_tag(items: List[LibraryItem], tag: Optional[str]) -> List[LibraryItem]:
    if not tag:
        return list(items)
    wanted = tag.lower()
    return [i for i in items if wanted in i.tags]


def _created_key(item: LibraryItem) -> datetime:
    return item.created_at or datetime.min


def sort_items(items: List[LibraryItem], sort: str = "newest", tab: str = "all") -> List[LibraryItem]:
    if tab == "progress":
        with_access = [i for i in items if i.last_accessed]
        without = [i for i in items if not i.last_accessed]
        with_access.sort(key=lambda i: i.last_accessed, reverse=True)
        return with_access + without

    if sort == "oldest":
        return sorted(items, key=_created_key)
    if sort == "title":
        return sorted(items, key=lambda i: (i.title or "").lower())
    if sort == "popular":
        return sorted(items, key=lambda i: (i.popularity, _created_key(i)), reverse=True)
    return sorted(items, key=_created_key, reverse=True)


def compute_stats(items: List[LibraryItem]) -> Dict[str, int]:
    return {
        "total": len(items),
        "videos": sum(1 for i in items if i.type in ("video", "sermon")),
        "audio": sum(1 for i in items if i.type == "audio"),
        "ebooks": sum(1 for i in items if i.type == "ebook"),
        "in_progress": sum(1 for i in items if i.progress_percent > 0 and not i.completed),
        "completed": sum(1 for i in items if i.completed),
        "watchlist": sum(1 for i in items if i.in_watchlist),
    }


def collect_tags(items: List[LibraryItem]) -> List[str]:
    return sorted({tag for item in items for tag in item.tags})


def build_series(items: List[LibraryItem], limit: int) -> List[Dict[str, Any]]:
    groups: Dict[str, List[LibraryItem]] = {}
    for item in items:
        if item.series_name:
            groups.setdefault(item.series_name, []).append(item)

    series = []
    for name, members in groups.items():
        members.sort(key=_created_key)
        series.append({
            "name": name,
            "count": len(members),
            "items": members[:limit],
            "_latest": _created_key(members[-1]),
        })
    series.sort(key=lambda s: s["_latest"], reverse=True)
    for group in series:
        del group["_latest"]
    return series[:limit]


def build_shelves(items: List[LibraryItem], shelf_size: int, recent_days: int,
                  now: Optional[datetime] = None) -> Dict[str, Any]:
    """Curated rows built from the accessible items"""
    now = now or datetime.utcnow()
    accessible = [i for i in items if i.has_access]
    cutoff = now - timedelta(days=recent_days)

    continue_watching = [i for i in accessible if i.progress_percent > 0 and not i.completed]
    continue_watching.sort(key=lambda i: i.last_accessed or datetime.min, reverse=True)

    featured = sorted((i for i in accessible if i.is_featured), key=_created_key, reverse=True)
    recently_added = sorted(
        (i for i in accessible if i.created_at and i.created_at >= cutoff),
        key=_created_key,
        reverse=True,
    )
    popular = sort_items([i for i in accessible if i.popularity > 0], sort="popular")

    return {
        "continue_watching": continue_watching[:shelf_size],
        "featured": featured[:shelf_size],
        "recently_added": recently_added[:shelf_size],
        "popular": popular[:shelf_size],
        "series": build_series(accessible, shelf_size),
    }


def aggregate_library(
    items: List[LibraryItem],
    tab: str = "all",
    tag: Optional[str] = None,
    sort: str = "newest",
    include_shelves: bool = True,
    shelf_size: int = 12,
    recent_days: int = 30,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Filter, sort and summarise the normalized items for one library view"""
    filtered = filter_by_tag(filter_by_tab(items, tab), tag)
    result: Dict[str, Any] = {
        "data": sort_items(filtered, sort, tab),
        "stats": compute_stats(items),
        "tags": collect_tags(items),
    }
    if include_shelves:
        result["shelves"] = build_shelves(items, shelf_size, recent_days, now)
    return result
