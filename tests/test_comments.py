from datetime import datetime, timedelta

from socialhub.models import Comment

from tests.conftest import auth

COMMENTS_URL = "/api/v1/comments"


async def test_list_comments_is_public_and_newest_first(client, make_user, make_post, add_rows):
    author = await make_user(name="Author")
    post = await make_post(author)
    start = datetime(2024, 3, 1)
    await add_rows(
        *[
            Comment(
                text_content=f"comment {i}",
                comment_user_id=author.id,
                post_id=post.id,
                created_at=start + timedelta(minutes=i),
            )
            for i in range(12)
        ]
    )

    response = await client.get(COMMENTS_URL, params={"post_id": post.id})
    assert response.status_code == 200
    comments = response.json()
    assert len(comments) == 10
    assert comments[0]["text_content"] == "comment 11"
    assert comments[-1]["text_content"] == "comment 2"
    assert comments[0]["name"] == "Author"
    assert comments[0]["comment_user_id"] == author.id


async def test_list_comments_requires_post_id(client):
    response = await client.get(COMMENTS_URL)
    assert response.status_code == 400


async def test_add_comment(client, make_user, make_post, count_rows):
    me = await make_user()
    post = await make_post(me)
    response = await client.post(
        COMMENTS_URL, json={"text_content": "Nice post", "post_id": post.id}, headers=auth(me)
    )
    assert response.status_code == 201
    assert response.json() == {"success": True, "message": "Comment added successfully"}
    assert await count_rows(Comment, Comment.post_id == post.id, Comment.comment_user_id == me.id) == 1


async def test_add_blank_comment(client, make_user, make_post):
    me = await make_user()
    post = await make_post(me)
    response = await client.post(COMMENTS_URL, json={"text_content": "  ", "post_id": post.id}, headers=auth(me))
    assert response.status_code == 400


async def test_add_comment_to_unknown_post(client, make_user):
    me = await make_user()
    response = await client.post(COMMENTS_URL, json={"text_content": "Hi", "post_id": 9999}, headers=auth(me))
    assert response.status_code == 404


async def test_add_comment_requires_auth(client, make_user, make_post):
    post = await make_post(await make_user())
    response = await client.post(COMMENTS_URL, json={"text_content": "Hi", "post_id": post.id})
    assert response.status_code == 401


async def test_delete_own_comment(client, make_user, make_post, add_rows, count_rows):
    me = await make_user()
    post = await make_post(me)
    (comment,) = await add_rows(Comment(text_content="mine", comment_user_id=me.id, post_id=post.id))
    response = await client.delete(f"{COMMENTS_URL}/{comment.id}", headers=auth(me))
    assert response.status_code == 200
    assert await count_rows(Comment) == 0


async def test_delete_comment_of_other_user_is_forbidden(client, make_user, make_post, add_rows, count_rows):
    me = await make_user()
    other = await make_user()
    post = await make_post(me)
    (comment,) = await add_rows(Comment(text_content="theirs", comment_user_id=other.id, post_id=post.id))
    response = await client.delete(f"{COMMENTS_URL}/{comment.id}", headers=auth(me))
    assert response.status_code == 403
    assert await count_rows(Comment) == 1


async def test_admin_deletes_any_comment(client, admin, make_user, make_post, add_rows, count_rows):
    other = await make_user()
    post = await make_post(other)
    (comment,) = await add_rows(Comment(text_content="spam", comment_user_id=other.id, post_id=post.id))
    response = await client.delete(f"{COMMENTS_URL}/{comment.id}", headers=auth(admin))
    assert response.status_code == 200
    assert await count_rows(Comment) == 0


async def test_delete_unknown_comment(client, make_user):
    me = await make_user()
    response = await client.delete(f"{COMMENTS_URL}/9999", headers=auth(me))
    assert response.status_code == 404
