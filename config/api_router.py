from django.urls import include
from django.urls import path

from confapp.attendees.api.views import AttendeeCountView
from confapp.attendees.api.views import AttendeeRegistrationView
from confapp.clock.api.views import TimeOverrideView
from confapp.clock.api.views import TimeView
from confapp.favorites.api.views import FavoritesView
from confapp.feed.api.views import FeedView
from confapp.live.api.views import LiveVideosView
from confapp.schedule.api.views import ConferenceDataView
from confapp.schedule.api.views import SessionizeSyncView
from confapp.votes.api.views import AllVotesView
from confapp.votes.api.views import VotesSummaryView
from confapp.votes.api.views import VotesView


def _route(route: str, view, name: str) -> list:
    """Serve ``route`` with and without the trailing slash.

    Mobile clients call the bare form (``/votes``) and cannot follow the
    APPEND_SLASH redirect for POST/DELETE.
    """
    return [
        path(f"{route}/", view, name=name),
        path(route, view, name=f"{name}-noslash"),
    ]


app_name = "api"
urlpatterns = [
    path(
        "audit/",
        include(("confapp.audit.api.urls", "audit"), namespace="audit"),
    ),
    *_route("users", AttendeeRegistrationView.as_view(), "users"),
    *_route("users/count", AttendeeCountView.as_view(), "users-count"),
    *_route("all", ConferenceDataView.as_view(), "all"),
    *_route("favorites", FavoritesView.as_view(), "favorites"),
    *_route("votes", VotesView.as_view(), "votes"),
    *_route("votes/all", AllVotesView.as_view(), "votes-all"),
    *_route(
        "votes/summary/<str:session_id>",
        VotesSummaryView.as_view(),
        "votes-summary",
    ),
    *_route("feed", FeedView.as_view(), "feed"),
    *_route("time", TimeView.as_view(), "time"),
    *_route("time/<str:timestamp>", TimeOverrideView.as_view(), "time-override"),
    *_route("live", LiveVideosView.as_view(), "live"),
    *_route("sessionizeSync", SessionizeSyncView.as_view(), "sessionize-sync"),
]
