# tests/v1/test_comments.py
"""Tests for comment creation, editing, soft deletion and listing."""

from fastapi import status

from ideahub_stage.models import Comment


def test_create_top_level_comment(client, auth_token, test_idea, test_user) -> None:
    response = client.post(
        "/api/v1/comments",
        json={"content": "  hello  ", "ideaId": test_idea.id},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["message"] == "Comment posted successfully"
    comment = data["comment"]
    assert comment["content"] == "hello"
    assert comment["ideaId"] == test_idea.id
    assert comment["parentId"] is None
    assert comment["votesCount"] == 0
    assert comment["isDeleted"] is False
    assert comment["author"] == {"id": test_user.id, "username": "alice", "image": None}
    assert comment["replyCount"] == 0
    assert comment["userVote"] is None


def test_create_reply(client, other_auth_token, test_idea, test_comment) -> None:
    response = client.post(
        "/api/v1/comments",
        json={"content": "hi back", "ideaId": test_idea.id, "commentId": test_comment.id},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["message"] == "Reply posted successfully"
    assert data["comment"]["parentId"] == test_comment.id


def test_create_comment_requires_auth(client, test_idea) -> None:
    response = client.post(
        "/api/v1/comments",
        json={"content": "hello", "ideaId": test_idea.id},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"error": "Unauthenticated", "detail": "You must be logged in"}


def test_create_comment_rejects_blank_content(client, auth_token, test_idea) -> None:
    response = client.post(
        "/api/v1/comments",
        json={"content": "   ", "ideaId": test_idea.id},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"] == "InvalidArgument"


def test_create_comment_length_bounds(client, auth_token, test_idea) -> None:
    ok = client.post(
        "/api/v1/comments",
        json={"content": "x" * 2000, "ideaId": test_idea.id},
        headers=auth_token,
    )
    assert ok.status_code == status.HTTP_201_CREATED

    too_long = client.post(
        "/api/v1/comments",
        json={"content": "x" * 2001, "ideaId": test_idea.id},
        headers=auth_token,
    )
    assert too_long.status_code == status.HTTP_400_BAD_REQUEST
    assert too_long.json()["detail"] == "Comment cannot exceed 2000 characters"


def test_create_comment_unknown_idea(client, auth_token) -> None:
    response = client.post(
        "/api/v1/comments",
        json={"content": "hello", "ideaId": 99999},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "NotFound", "detail": "Idea not found"}


def test_create_reply_unknown_parent(client, auth_token, test_idea) -> None:
    response = client.post(
        "/api/v1/comments",
        json={"content": "hello", "ideaId": test_idea.id, "commentId": 99999},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Parent comment not found"


def test_create_reply_parent_on_other_idea(
    client, auth_token, test_user, make_idea, test_comment
) -> None:
    elsewhere = make_idea(test_user, title="Another idea")
    response = client.post(
        "/api/v1/comments",
        json={"content": "hello", "ideaId": elsewhere.id, "commentId": test_comment.id},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Parent comment does not belong to this idea"


def test_create_comment_missing_fields(client, auth_token) -> None:
    response = client.post("/api/v1/comments", json={"content": "hello"}, headers=auth_token)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_edit_own_comment(client, auth_token, test_comment, db_session) -> None:
    response = client.patch(
        f"/api/v1/comments/{test_comment.id}",
        json={"content": " edited "},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Comment updated successfully"
    assert data["comment"]["content"] == "edited"
    assert data["comment"]["votesCount"] == 0

    stored = db_session.get(Comment, test_comment.id)
    assert stored.content == "edited"


def test_edit_keeps_votes_and_created_at(
    client, auth_token, make_comment, test_idea, test_user
) -> None:
    comment = make_comment(test_idea, test_user, "original", votes_count=7)
    created = client.get(f"/api/v1/comments?ideaId={test_idea.id}").json()["comments"][0]

    response = client.patch(
        f"/api/v1/comments/{comment.id}",
        json={"content": "changed"},
        headers=auth_token,
    )
    edited = response.json()["comment"]
    assert edited["votesCount"] == 7
    assert edited["createdAt"] == created["createdAt"]


def test_edit_someone_elses_comment(client, other_auth_token, test_comment) -> None:
    response = client.patch(
        f"/api/v1/comments/{test_comment.id}",
        json={"content": "hijack"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {
        "error": "Forbidden",
        "detail": "You can only edit your own comments",
    }


def test_edit_deleted_comment(client, auth_token, make_comment, test_idea, test_user) -> None:
    comment = make_comment(test_idea, test_user, "[deleted]", is_deleted=True)
    response = client.patch(
        f"/api/v1/comments/{comment.id}",
        json={"content": "resurrect"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Cannot edit deleted comments"


def test_edit_validates_content(client, auth_token, test_comment) -> None:
    response = client.patch(
        f"/api/v1/comments/{test_comment.id}",
        json={"content": ""},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_edit_unknown_comment(client, auth_token) -> None:
    response = client.patch(
        "/api/v1/comments/99999",
        json={"content": "nothing here"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_soft_delete_comment(client, auth_token, test_comment, db_session) -> None:
    response = client.delete(f"/api/v1/comments/{test_comment.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "message": "Comment deleted successfully"}

    stored = db_session.get(Comment, test_comment.id)
    assert stored.is_deleted is True
    assert stored.content == "[deleted]"


def test_soft_delete_twice_conflicts(client, auth_token, test_comment) -> None:
    first = client.delete(f"/api/v1/comments/{test_comment.id}", headers=auth_token)
    assert first.status_code == status.HTTP_200_OK

    second = client.delete(f"/api/v1/comments/{test_comment.id}", headers=auth_token)
    assert second.status_code == status.HTTP_409_CONFLICT
    assert second.json() == {"error": "Conflict", "detail": "Comment already deleted"}


def test_soft_delete_someone_elses_comment(client, other_auth_token, test_comment) -> None:
    response = client.delete(f"/api/v1/comments/{test_comment.id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_soft_delete_keeps_votes_and_children(
    client, auth_token, make_comment, test_idea, test_user, other_user, db_session
) -> None:
    parent = make_comment(test_idea, test_user, "parent", votes_count=3)
    child = make_comment(test_idea, other_user, "child", parent=parent)

    client.delete(f"/api/v1/comments/{parent.id}", headers=auth_token)

    db_session.expire_all()
    assert db_session.get(Comment, parent.id).votes_count == 3
    assert db_session.get(Comment, child.id).parent_comment_id == parent.id


def test_list_comments_order(client, make_comment, test_idea, test_user) -> None:
    older_popular = make_comment(test_idea, test_user, "older popular", votes_count=5)
    newer_popular = make_comment(test_idea, test_user, "newer popular", votes_count=5)
    unpopular = make_comment(test_idea, test_user, "unpopular", votes_count=-2)
    plain = make_comment(test_idea, test_user, "plain")

    response = client.get(f"/api/v1/comments?ideaId={test_idea.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [c["id"] for c in data["comments"]] == [
        newer_popular.id,
        older_popular.id,
        plain.id,
        unpopular.id,
    ]
    assert data["hasMore"] is False
    assert data["nextCursor"] is None


def test_list_comments_excludes_replies(client, make_comment, test_idea, test_user) -> None:
    parent = make_comment(test_idea, test_user, "parent")
    make_comment(test_idea, test_user, "reply", parent=parent)

    data = client.get(f"/api/v1/comments?ideaId={test_idea.id}").json()
    assert [c["id"] for c in data["comments"]] == [parent.id]
    assert data["comments"][0]["replyCount"] == 1


def test_list_comments_unknown_idea(client) -> None:
    response = client.get("/api/v1/comments?ideaId=99999")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_comments_requires_idea_id(client) -> None:
    response = client.get("/api/v1/comments")
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_deleted_leaf_is_hidden(client, auth_token, make_comment, test_idea, test_user) -> None:
    keep = make_comment(test_idea, test_user, "keep")
    leaf = make_comment(test_idea, test_user, "leaf")
    client.delete(f"/api/v1/comments/{leaf.id}", headers=auth_token)

    data = client.get(f"/api/v1/comments?ideaId={test_idea.id}").json()
    assert [c["id"] for c in data["comments"]] == [keep.id]


def test_deleted_parent_with_reply_is_placeholder(
    client, auth_token, make_comment, test_idea, test_user, other_user
) -> None:
    parent = make_comment(test_idea, test_user, "parent")
    make_comment(test_idea, other_user, "reply", parent=parent)
    client.delete(f"/api/v1/comments/{parent.id}", headers=auth_token)

    data = client.get(f"/api/v1/comments?ideaId={test_idea.id}").json()
    assert len(data["comments"]) == 1
    placeholder = data["comments"][0]
    assert placeholder["id"] == parent.id
    assert placeholder["content"] == "[deleted]"
    assert placeholder["isDeleted"] is True


def test_deleted_parent_with_only_deleted_reply_stays_visible(
    client, make_comment, test_idea, test_user
) -> None:
    parent = make_comment(test_idea, test_user, "[deleted]", is_deleted=True)
    reply = make_comment(test_idea, test_user, "[deleted]", parent=parent, is_deleted=True)

    top = client.get(f"/api/v1/comments?ideaId={test_idea.id}").json()
    assert [c["id"] for c in top["comments"]] == [parent.id]

    # The reply itself is a deleted leaf.
    replies = client.get(f"/api/v1/comments/{parent.id}/replies").json()
    assert reply.id not in [c["id"] for c in replies["replies"]]


def test_list_replies_order(client, make_comment, test_idea, test_user, other_user) -> None:
    parent = make_comment(test_idea, test_user, "parent")
    first = make_comment(test_idea, other_user, "first", parent=parent)
    second = make_comment(test_idea, other_user, "second", parent=parent)
    popular = make_comment(test_idea, other_user, "popular", parent=parent, votes_count=2)

    response = client.get(f"/api/v1/comments/{parent.id}/replies")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [c["id"] for c in data["replies"]] == [popular.id, first.id, second.id]
    assert data["hasMore"] is False


def test_list_replies_unknown_comment(client) -> None:
    response = client.get("/api/v1/comments/99999/replies")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_listing_carries_callers_vote(client, auth_token, test_comment, test_idea) -> None:
    client.post(
        "/api/v1/votes/comments",
        json={"commentId": test_comment.id, "voteType": "DOWN"},
        headers=auth_token,
    )

    mine = client.get(f"/api/v1/comments?ideaId={test_idea.id}", headers=auth_token).json()
    assert mine["comments"][0]["userVote"] == "DOWN"

    anonymous = client.get(f"/api/v1/comments?ideaId={test_idea.id}").json()
    assert anonymous["comments"][0]["userVote"] is None


def test_idea_id_beyond_key_range_rejected(client, auth_token) -> None:
    listing = client.get(f"/api/v1/comments?ideaId={10**30}")
    assert listing.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    create = client.post(
        "/api/v1/comments",
        json={"content": "hello", "ideaId": 10**30},
        headers=auth_token,
    )
    assert create.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_comment_path_id_beyond_key_range_rejected(client, auth_token) -> None:
    for response in (
        client.patch(f"/api/v1/comments/{10**30}", json={"content": "x"}, headers=auth_token),
        client.delete(f"/api/v1/comments/{10**30}", headers=auth_token),
        client.get(f"/api/v1/comments/{10**30}/replies"),
        client.get("/api/v1/comments/0/replies"),
    ):
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
