from video_api.db import Base

CREATED_MESSAGE = "Object created. Please upload the file for this Video."


def create(client, **body):
    return client.post("/api/v1/videos", json=body)


def test_list_is_empty_initially(client):
    response = client.get("/api/v1/videos")

    assert response.status_code == 200
    assert response.json() == {"count": 0, "results": []}


def test_create_video(client):
    response = create(client, title="demo")

    assert response.status_code == 200
    assert response.json() == {"title": "demo", "message": CREATED_MESSAGE}


def test_created_video_is_listed_once(client):
    create(client, title="first")
    create(client, title="demo", description="a clip", duration_str="00:42")

    body = client.get("/api/v1/videos").json()

    assert body["count"] == 2
    titles = [v["title"] for v in body["results"]]
    assert titles.count("demo") == 1
    assert titles == ["first", "demo"]
    demo = body["results"][1]
    assert demo["description"] == "a clip"
    assert demo["duration_str"] == "00:42"
    assert isinstance(demo["id"], int)


def test_list_is_repeatable_without_writes(client):
    create(client, title="a")
    create(client, title="b")

    assert client.get("/api/v1/videos").json() == client.get("/api/v1/videos").json()


def test_unknown_fields_are_ignored(client):
    response = create(client, title="demo", codec="h264")

    assert response.status_code == 200
    assert "codec" not in client.get("/api/v1/videos").json()["results"][0]


def test_get_video_detail(client):
    create(client, title="demo", url="http://cdn.test/demo.mp4")
    video_id = client.get("/api/v1/videos").json()["results"][0]["id"]

    response = client.get(f"/api/v1/videos/{video_id}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == video_id
    assert data["title"] == "demo"
    assert data["url"] == "http://cdn.test/demo.mp4"


def test_get_missing_video_is_client_error(client):
    response = client.get("/api/v1/videos/9999999")

    assert response.status_code == 400
    body = response.json()
    assert "error" in body
    assert "data" not in body


def test_get_non_integer_id_is_client_error(client):
    response = client.get("/api/v1/videos/abc")

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_without_title_is_client_error(client):
    response = create(client, description="no title")

    assert response.status_code == 400
    assert "title" in response.json()["error"]
    assert client.get("/api/v1/videos").json()["count"] == 0


def test_create_with_malformed_json_is_client_error(client):
    response = client.post(
        "/api/v1/videos",
        content=b'{"title": ',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_store_failure_is_client_error(client, engine):
    Base.metadata.drop_all(bind=engine)

    listed = client.get("/api/v1/videos")
    created = create(client, title="demo")

    assert listed.status_code == 400
    assert "error" in listed.json()
    assert created.status_code == 400
    assert "error" in created.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_list_count_matches_results(client):
    for title in ("a", "b", "c"):
        create(client, title=title)

    body = client.get("/api/v1/videos").json()

    assert body["count"] == len(body["results"]) == 3
