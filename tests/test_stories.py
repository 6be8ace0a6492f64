from datetime import date

from sqlmodel import func, select

from models import Story
from routers.pages import gallery_categories, lightbox

NEW_STORY = {
    "name": "Ngozi Eze",
    "story": "Ngozi's hip replacement was fully funded.",
    "before_image": "https://example.org/before.jpg",
    "after_image": "https://example.org/after.jpg",
    "category": "surgery",
    "status": "draft",
}


def _story_count(fresh_session):
    with fresh_session() as s:
        return s.exec(select(func.count()).select_from(Story)).one()


def test_admin_list_shows_drafts_and_published(admin_client):
    resp = admin_client.get("/admin/stories")
    assert resp.status_code == 200
    assert "Fatima Hassan" in resp.text
    assert "Aisha Bello" in resp.text
    assert "6 stories" in resp.text


def test_admin_list_filters_are_conjunctive(admin_client):
    resp = admin_client.get("/admin/stories", params={"category": "surgery", "status": "published", "search": "kemi"})
    assert "Kemi Adebayo" in resp.text
    assert "Aisha Bello" not in resp.text
    assert "1 story" in resp.text


def test_new_story_form_defaults(admin_client):
    resp = admin_client.get("/admin/stories/new")
    assert resp.status_code == 200
    assert '<option value="surgery" selected' in resp.text
    assert '<option value="draft" selected' in resp.text


def test_create_from_form_puts_story_first(admin_client, fresh_session):
    resp = admin_client.post("/admin/stories", data=NEW_STORY)
    assert resp.status_code == 200
    assert "The new story has been successfully created." in resp.text
    assert resp.text.index("Ngozi Eze") < resp.text.index("Aisha Bello")

    with fresh_session() as s:
        created = s.exec(select(Story).where(Story.name == "Ngozi Eze")).one()
    assert created.status == "draft"
    assert created.created_at == date.today()


def test_create_from_form_requires_name_and_story(admin_client, fresh_session):
    before = _story_count(fresh_session)
    resp = admin_client.post("/admin/stories", data={**NEW_STORY, "name": "  "})
    assert resp.status_code == 400
    assert "Name:" in resp.text
    assert _story_count(fresh_session) == before


def test_non_image_upload_is_rejected(admin_client, fresh_session):
    before = _story_count(fresh_session)
    resp = admin_client.post(
        "/admin/stories",
        data=NEW_STORY,
        files={"before_image_file": ("notes.txt", b"not a picture", "text/plain")},
    )
    assert resp.status_code == 400
    assert "Please upload an image file." in resp.text
    assert _story_count(fresh_session) == before


def test_image_upload_is_stored_as_data_url(admin_client, fresh_session):
    resp = admin_client.post(
        "/admin/stories",
        data=NEW_STORY,
        files={"after_image_file": ("after.png", b"\x89PNG\r\n", "image/png")},
    )
    assert resp.status_code == 200
    with fresh_session() as s:
        created = s.exec(select(Story).where(Story.name == "Ngozi Eze")).one()
    assert created.after_image.startswith("data:image/png;base64,")
    assert created.before_image == NEW_STORY["before_image"]


def test_update_from_form(admin_client, fresh_session):
    edit = admin_client.get("/admin/stories/3/edit")
    assert edit.status_code == 200
    assert "Fatima Hassan" in edit.text

    resp = admin_client.post(
        "/admin/stories/3",
        data={"name": "Fatima Hassan", "story": "Back at school.", "category": "emergency", "status": "published"},
    )
    assert resp.status_code == 200
    assert "The story has been successfully updated." in resp.text
    with fresh_session() as s:
        story = s.get(Story, 3)
    assert story.status == "published"
    assert story.story == "Back at school."


def test_delete_from_form(admin_client, fresh_session):
    resp = admin_client.post("/admin/stories/3/delete")
    assert resp.status_code == 200
    assert "The story has been successfully deleted." in resp.text
    with fresh_session() as s:
        assert s.get(Story, 3) is None


def test_delete_missing_story_shows_error(admin_client):
    resp = admin_client.post("/admin/stories/999/delete")
    assert resp.status_code == 200
    assert "Story not found." in resp.text


def test_api_story_crud(admin_client):
    created = admin_client.post("/api/admin/stories", json=NEW_STORY)
    assert created.status_code == 201
    story_id = created.json()["id"]

    updated = admin_client.put(f"/api/admin/stories/{story_id}", json={"status": "published"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "published"
    assert updated.json()["name"] == "Ngozi Eze"

    listed = admin_client.get("/api/admin/stories", params={"search": "ngozi"}).json()
    assert [s["id"] for s in listed] == [story_id]

    assert admin_client.delete(f"/api/admin/stories/{story_id}").status_code == 204
    assert admin_client.get("/api/admin/stories", params={"search": "ngozi"}).json() == []


def test_api_rejects_unknown_category(admin_client):
    assert admin_client.post("/api/admin/stories", json={**NEW_STORY, "category": "dental"}).status_code == 422
    assert admin_client.get("/api/admin/stories", params={"category": "dental"}).status_code == 400


def test_gallery_shows_published_only(client):
    resp = client.get("/gallery")
    assert resp.status_code == 200
    assert "Aisha Bello" in resp.text
    assert "Fatima Hassan" not in resp.text
    assert "All Stories (5)" in resp.text
    assert "Surgery (2)" in resp.text
    assert "Emergency Care (0)" in resp.text


def test_gallery_category_filter(client):
    resp = client.get("/gallery", params={"category": "cancer"})
    assert "Chukwudi Okonkwo" in resp.text
    assert "Kemi Adebayo" not in resp.text


def test_gallery_unknown_category_shows_everything(client):
    resp = client.get("/gallery", params={"category": "dental"})
    assert resp.status_code == 200
    assert "Kemi Adebayo" in resp.text


def test_gallery_lightbox_is_clamped(client):
    resp = client.get("/gallery", params={"category": "cancer", "photo": 7})
    assert 'class="lightbox"' in resp.text
    assert "1 / 1" in resp.text


def test_lightbox_navigation():
    items = ["a", "b", "c"]
    assert lightbox(items, None) is None
    assert lightbox([], 0) is None
    assert lightbox(items, 0) == {"index": 0, "item": "a", "prev": None, "next": 1}
    assert lightbox(items, 1)["prev"] == 0
    assert lightbox(items, -4)["index"] == 0
    assert lightbox(items, 10) == {"index": 2, "item": "c", "prev": 1, "next": None}


def test_gallery_categories_count_each_bucket():
    stories = [Story(name="a", story="x", category="surgery"), Story(name="b", story="y", category="cancer")]
    counts = {c["id"]: c["count"] for c in gallery_categories(stories)}
    assert counts["all"] == 2
    assert counts["surgery"] == 1
    assert counts["maternity"] == 0
