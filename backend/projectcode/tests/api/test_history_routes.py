from projectcode import crud
from projectcode.core.config import settings
from projectcode.models import AnalysisHistoryItemCreate


def test_practice_history_create_list_and_patch(client):
    r = client.post(
        f"{settings.API_V1_STR}/history/practice",
        json={"practice_type": "accent", "prompt": "The quick brown fox", "language": "English"},
    )
    assert r.status_code == 200
    item = r.json()
    assert item["user_id"] == "user-1"

    r = client.patch(
        f"{settings.API_V1_STR}/history/practice/{item['id']}",
        json={"analysis": {"overallAccuracy": 91}},
    )
    assert r.status_code == 200
    assert r.json()["analysis"] == {"overallAccuracy": 91}

    r = client.get(f"{settings.API_V1_STR}/history/practice")
    assert [i["id"] for i in r.json()] == [item["id"]]


def test_practice_history_rejects_unknown_type(client):
    r = client.post(f"{settings.API_V1_STR}/history/practice", json={"practice_type": "karaoke"})
    assert r.status_code == 422


def test_history_limit_is_capped(client):
    r = client.get(f"{settings.API_V1_STR}/history/analysis", params={"limit": settings.ANALYSIS_HISTORY_LIMIT + 1})
    assert r.status_code == 422


def test_patch_of_someone_elses_item_is_not_found(session, client):
    other = crud.add_analysis_history_item(
        session=session, user_id="someone-else", item_in=AnalysisHistoryItemCreate(topic="Why this role?")
    )

    r = client.patch(f"{settings.API_V1_STR}/history/analysis/{other.id}", json={"transcript": "x"})
    assert r.status_code == 404

    r = client.get(f"{settings.API_V1_STR}/history/analysis")
    assert r.json() == []
