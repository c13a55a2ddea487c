"""End-to-end discussion flow across ideas, comments and votes."""

from fastapi import status


def test_discussion_flow(client, auth_headers, make_user) -> None:
    author = make_user("ana")
    replier = make_user("ben")
    a_headers = auth_headers(author)
    b_headers = auth_headers(replier)

    idea = client.post(
        "/api/v1/ideas",
        json={"title": "Shared tool library", "description": {"type": "doc"}},
        headers=a_headers,
    )
    assert idea.status_code == status.HTTP_201_CREATED
    idea_id = idea.json()["id"]

    c1 = client.post(
        "/api/v1/comments",
        json={"content": "hello", "ideaId": idea_id},
        headers=a_headers,
    ).json()["comment"]
    c2 = client.post(
        "/api/v1/comments",
        json={"content": "hi back", "ideaId": idea_id, "commentId": c1["id"]},
        headers=b_headers,
    ).json()["comment"]

    vote = client.post(
        "/api/v1/votes/comments",
        json={"commentId": c1["id"], "voteType": "UP"},
        headers=b_headers,
    )
    assert vote.json()["votesCount"] == 1

    deleted = client.delete(f"/api/v1/comments/{c1['id']}", headers=a_headers)
    assert deleted.status_code == status.HTTP_200_OK

    listing = client.get(f"/api/v1/comments?ideaId={idea_id}&limit=20", headers=b_headers).json()
    assert listing["hasMore"] is False
    assert listing["nextCursor"] is None
    assert [c["id"] for c in listing["comments"]] == [c1["id"]]
    placeholder = listing["comments"][0]
    assert placeholder["content"] == "[deleted]"
    assert placeholder["isDeleted"] is True
    assert placeholder["votesCount"] == 1
    assert placeholder["replyCount"] == 1
    assert placeholder["userVote"] == "UP"

    replies = client.get(f"/api/v1/comments/{c1['id']}/replies").json()
    assert [c["id"] for c in replies["replies"]] == [c2["id"]]
    assert replies["replies"][0]["content"] == "hi back"

    idea_view = client.get(f"/api/v1/ideas/{idea_id}").json()
    assert idea_view["commentCount"] == 1
