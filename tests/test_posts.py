from datetime import datetime

from socialhub.models import Comment, Like, Post, SavedPost

from tests.conftest import BUCKET_URL, auth, png_bytes

POSTS_URL = "/api/v1/posts"


async def test_home_feed_shows_own_and_followed_posts(client, make_user, make_post, follow):
    me = await make_user()
    friend = await make_user()
    stranger = await make_user()
    await follow(me, friend)
    mine = await make_post(me, "mine")
    theirs = await make_post(friend, "theirs")
    await make_post(stranger, "hidden")

    response = await client.get(POSTS_URL, headers=auth(me))
    assert response.status_code == 200
    feed = response.json()
    assert [p["id"] for p in feed] == [theirs.id, mine.id]
    assert feed[0]["name"] == friend.name
    assert feed[0]["user_id"] == friend.id


async def test_home_feed_counts_and_viewer_flags(client, make_user, make_post, add_rows):
    me = await make_user()
    other = await make_user()
    post = await make_post(me)
    await add_rows(
        Like(like_user_id=me.id, like_post_id=post.id),
        Like(like_user_id=other.id, like_post_id=post.id),
        Comment(text_content="one", comment_user_id=other.id, post_id=post.id),
        SavedPost(user_id=other.id, saved_post_id=post.id),
    )

    feed = (await client.get(POSTS_URL, headers=auth(me))).json()
    assert len(feed) == 1
    assert feed[0]["likes_num"] == 2
    assert feed[0]["comments_num"] == 1
    assert feed[0]["is_liked"] is True
    assert feed[0]["is_saved"] is False


async def test_home_feed_ties_break_by_id(client, make_user, make_post):
    me = await make_user()
    same_time = datetime(2024, 5, 1, 9, 30)
    first = await make_post(me, created_at=same_time)
    second = await make_post(me, created_at=same_time)
    feed = (await client.get(POSTS_URL, headers=auth(me))).json()
    assert [p["id"] for p in feed] == [second.id, first.id]


async def test_profile_feed(client, make_user, make_post):
    me = await make_user()
    other = await make_user()
    await make_post(me)
    older = await make_post(other, "older")
    newer = await make_post(other, "newer")

    feed = (await client.get(POSTS_URL, params={"user_id": other.id}, headers=auth(me))).json()
    assert [p["id"] for p in feed] == [newer.id, older.id]


async def test_feed_requires_auth(client):
    response = await client.get(POSTS_URL)
    assert response.status_code == 401
    assert response.json() == {"message": "jwt_error"}


async def test_create_text_post(client, make_user, recorder):
    me = await make_user()
    response = await client.post(POSTS_URL, data={"text_content": "Hello world"}, headers=auth(me))
    assert response.status_code == 201
    assert response.json() == {"success": True, "message": "Post added successfully"}
    assert recorder.requests == []

    feed = (await client.get(POSTS_URL, headers=auth(me))).json()
    assert feed[0]["text_content"] == "Hello world"
    assert feed[0]["image"] is None
    assert feed[0]["blurhash_string"] is None


async def test_create_post_with_image(client, make_user, recorder):
    me = await make_user()
    response = await client.post(
        POSTS_URL,
        data={"text_content": "With a picture"},
        files={"image": ("holiday.png", png_bytes(), "image/png")},
        headers=auth(me),
    )
    assert response.status_code == 201
    assert len(recorder.uploads) == 1
    assert recorder.uploads[0].startswith("/storage/v1/object/post-images/")

    post = (await client.get(POSTS_URL, headers=auth(me))).json()[0]
    assert post["image"].startswith(f"{BUCKET_URL}/post-images/")
    assert post["image"].endswith("-holiday.png")
    assert len(post["blurhash_string"]) == 22


async def test_create_post_requires_text(client, make_user):
    me = await make_user()
    response = await client.post(POSTS_URL, data={"text_content": "   "}, headers=auth(me))
    assert response.status_code == 400
    assert response.json()["message"] == "Post cannot be empty"


async def test_create_post_rejects_non_image(client, make_user, recorder, count_rows):
    me = await make_user()
    response = await client.post(
        POSTS_URL,
        data={"text_content": "Not a picture"},
        files={"image": ("notes.txt", b"plain text", "text/plain")},
        headers=auth(me),
    )
    assert response.status_code == 400
    assert recorder.requests == []
    assert await count_rows(Post) == 0


async def test_create_post_rejects_corrupt_image(client, make_user, recorder):
    me = await make_user()
    response = await client.post(
        POSTS_URL,
        data={"text_content": "Broken"},
        files={"image": ("broken.png", b"not really a png", "image/png")},
        headers=auth(me),
    )
    assert response.status_code == 400
    assert recorder.requests == []


async def test_create_post_upload_failure(client, make_user, recorder, count_rows):
    me = await make_user()
    recorder.fail = True
    response = await client.post(
        POSTS_URL,
        data={"text_content": "Upload fails"},
        files={"image": ("pic.png", png_bytes(), "image/png")},
        headers=auth(me),
    )
    assert response.status_code == 500
    assert response.json()["message"] == "Something went wrong while uploading the image"
    assert await count_rows(Post) == 0


async def test_delete_own_post_removes_image(client, make_user, make_post, count_rows, recorder):
    me = await make_user()
    post = await make_post(me, image=f"{BUCKET_URL}/post-images/abc-pic.png")
    response = await client.delete(f"{POSTS_URL}/{post.id}", headers=auth(me))
    assert response.status_code == 200
    assert response.json()["message"] == "Post deleted successfully"
    assert recorder.removals == [("post-images", ["abc-pic.png"])]
    assert await count_rows(Post, Post.id == post.id) == 0


async def test_delete_post_cascades(client, make_user, make_post, add_rows, count_rows):
    me = await make_user()
    other = await make_user()
    post = await make_post(me)
    await add_rows(
        Like(like_user_id=other.id, like_post_id=post.id),
        Comment(text_content="nice", comment_user_id=other.id, post_id=post.id),
        SavedPost(user_id=other.id, saved_post_id=post.id),
    )
    response = await client.delete(f"{POSTS_URL}/{post.id}", headers=auth(me))
    assert response.status_code == 200
    assert await count_rows(Like) == 0
    assert await count_rows(Comment) == 0
    assert await count_rows(SavedPost) == 0


async def test_delete_post_of_other_user_is_forbidden(client, make_user, make_post, count_rows, recorder):
    me = await make_user()
    other = await make_user()
    post = await make_post(other, image=f"{BUCKET_URL}/post-images/x.png")
    response = await client.delete(f"{POSTS_URL}/{post.id}", headers=auth(me))
    assert response.status_code == 403
    assert response.json()["message"] == "Only post owners or admins are allowed to delete posts"
    assert recorder.requests == []
    assert await count_rows(Post, Post.id == post.id) == 1


async def test_admin_deletes_any_post(client, admin, make_user, make_post, count_rows):
    other = await make_user()
    post = await make_post(other)
    response = await client.delete(f"{POSTS_URL}/{post.id}", headers=auth(admin))
    assert response.status_code == 200
    assert await count_rows(Post, Post.id == post.id) == 0


async def test_delete_unknown_post(client, make_user):
    me = await make_user()
    response = await client.delete(f"{POSTS_URL}/9999", headers=auth(me))
    assert response.status_code == 404


async def test_delete_post_keeps_row_when_storage_fails(client, make_user, make_post, count_rows, recorder):
    me = await make_user()
    post = await make_post(me, image=f"{BUCKET_URL}/post-images/keep.png")
    recorder.fail = True
    response = await client.delete(f"{POSTS_URL}/{post.id}", headers=auth(me))
    assert response.status_code == 500
    assert await count_rows(Post, Post.id == post.id) == 1


async def test_saved_posts(client, make_user, make_post):
    me = await make_user()
    other = await make_user()
    first = await make_post(other, "first")
    second = await make_post(other, "second")

    for post in (second, first):
        response = await client.post(f"{POSTS_URL}/saved", json={"post_id": post.id}, headers=auth(me))
        assert response.status_code == 201

    saved = (await client.get(f"{POSTS_URL}/saved", headers=auth(me))).json()
    assert [p["id"] for p in saved] == [second.id, first.id]
    assert all(p["is_saved"] for p in saved)

    response = await client.delete(f"{POSTS_URL}/saved/{second.id}", headers=auth(me))
    assert response.status_code == 200
    saved = (await client.get(f"{POSTS_URL}/saved", headers=auth(me))).json()
    assert [p["id"] for p in saved] == [first.id]


async def test_save_post_twice(client, make_user, make_post):
    me = await make_user()
    post = await make_post(me)
    await client.post(f"{POSTS_URL}/saved", json={"post_id": post.id}, headers=auth(me))
    response = await client.post(f"{POSTS_URL}/saved", json={"post_id": post.id}, headers=auth(me))
    assert response.status_code == 409


async def test_save_unknown_post(client, make_user):
    me = await make_user()
    response = await client.post(f"{POSTS_URL}/saved", json={"post_id": 9999}, headers=auth(me))
    assert response.status_code == 404
