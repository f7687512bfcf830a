"""
Tests for the follow toggle and follower queries.
"""

import pytest

from outmentor.core.errors import InvalidOperation, NotFound, StoreFailure
from outmentor.modules.follows.schemas import FollowState
from outmentor.modules.follows.service import FollowService


class TestToggleFollow:
    def test_follow_then_unfollow(self, supabase, mentor, team):
        service = FollowService(supabase)

        assert service.toggle_follow("team-1", "mentor-1") == FollowState.FOLLOWING
        assert service.is_following("team-1", "mentor-1")
        assert service.get_follower_count("mentor-1") == 1

        assert service.toggle_follow("team-1", "mentor-1") == FollowState.NOT_FOLLOWING
        assert not service.is_following("team-1", "mentor-1")
        assert service.get_follower_count("mentor-1") == 0

    def test_self_follow_is_rejected_before_store(self, supabase, mentor):
        with pytest.raises(InvalidOperation) as exc_info:
            FollowService(supabase).toggle_follow("mentor-1", "mentor-1")
        assert exc_info.value.status_code == 400
        assert supabase.calls == []

    def test_at_most_one_edge_per_pair(self, supabase, mentor, team):
        service = FollowService(supabase)
        for _ in range(5):
            service.toggle_follow("team-1", "mentor-1")
        edges = [r for r in supabase.rows("followers") if r["following_id"] == "mentor-1"]
        assert len(edges) == 1

    def test_existing_edge_is_not_duplicated_by_insert(self, supabase, mentor, team):
        supabase.seed("followers", [{"follower_id": "team-1", "following_id": "mentor-1"}])
        service = FollowService(supabase)
        # A racing toggle already inserted the pair: the upsert leaves it alone
        supabase.table("followers").upsert(
            {"follower_id": "team-1", "following_id": "mentor-1"},
            on_conflict="follower_id,following_id",
            ignore_duplicates=True
        ).execute()
        assert service.get_follower_count("mentor-1") == 1

    def test_follow_is_directional(self, supabase, mentor, team):
        service = FollowService(supabase)
        service.toggle_follow("team-1", "mentor-1")
        assert not service.is_following("mentor-1", "team-1")
        assert service.get_follower_count("team-1") == 0

    def test_unknown_target(self, supabase, team):
        with pytest.raises(NotFound):
            FollowService(supabase).toggle_follow("team-1", "ghost")
        assert supabase.rows("followers") == []

    def test_store_failure(self, supabase, mentor, team):
        supabase.failing_tables.add("followers")
        with pytest.raises(StoreFailure):
            FollowService(supabase).toggle_follow("team-1", "mentor-1")


class TestFollowers:
    def test_list_followers(self, supabase, mentor, team, other_mentor):
        service = FollowService(supabase)
        service.toggle_follow("team-1", "mentor-1")
        service.toggle_follow("mentor-2", "mentor-1")

        followers = service.list_followers("mentor-1")
        assert sorted(f.id for f in followers) == ["mentor-2", "team-1"]
        assert {f.full_name for f in followers} == {"RoboTitans", "Bruno Lima"}

    def test_no_followers(self, supabase, mentor):
        service = FollowService(supabase)
        assert service.list_followers("mentor-1") == []
        assert service.get_follower_count("mentor-1") == 0
