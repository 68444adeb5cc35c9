# tests/test_courses_api.py
import pytest
from fastapi.testclient import TestClient

@pytest.mark.api
class TestCoursesAPI:
    def test_create_and_list_courses(self, client: TestClient):
        first = client.post("/courses/", json={"name": "  Verbs  "})
        second = client.post("/courses/", json={"name": "Nouns", "description": "Things"})
        assert first.status_code == 201
        assert first.json()["name"] == "Verbs"
        assert first.json()["description"] is None

        response = client.get("/courses/")
        assert response.status_code == 200
        names = [c["name"] for c in response.json()]
        assert names == ["Verbs", "Nouns"]
        assert client.get(f"/courses/{second.json()['id']}").json()["description"] == "Things"

    def test_blank_course_name_is_rejected(self, client: TestClient):
        assert client.post("/courses/", json={"name": "   "}).status_code == 422
        assert client.post("/courses/", json={}).status_code == 422

    def test_missing_course(self, client: TestClient):
        assert client.get("/courses/9999").status_code == 404
        assert client.get("/courses/9999/questions").status_code == 404
        assert client.delete("/courses/9999").status_code == 404
        response = client.post("/courses/9999/questions", json={"title": "x", "answer_content": "y"})
        assert response.status_code == 404

    def test_questions_come_back_in_sort_order(self, client: TestClient, course):
        response = client.get(f"/courses/{course['id']}/questions")
        assert response.status_code == 200
        data = response.json()
        assert [q["sort_position"] for q in data] == [1, 2, 3]
        assert data[0]["answer_content"] == "My name is apple"
        assert data[1]["answer_content"] is None

    def test_explicit_sort_order(self, client: TestClient, course):
        response = client.post(
            f"/courses/{course['id']}/questions",
            json={"title": "Early", "answer_content": "first", "sort_order": 0},
        )
        assert response.status_code == 201
        titles = [q["title"] for q in client.get(f"/courses/{course['id']}/questions").json()]
        assert titles[0] == "Early"

    def test_duplicate_sort_order_conflicts(self, client: TestClient, course):
        response = client.post(
            f"/courses/{course['id']}/questions",
            json={"title": "Clash", "answer_content": "x", "sort_order": 1},
        )
        assert response.status_code == 409

    def test_reorder_questions(self, client: TestClient, course):
        ids = [q["id"] for q in course["questions"]]
        response = client.put(f"/courses/{course['id']}/questions/order", json={"question_ids": ids[::-1]})
        assert response.status_code == 200
        data = response.json()
        assert [q["id"] for q in data] == ids[::-1]
        assert [q["sort_position"] for q in data] == [1, 2, 3]

    def test_reorder_must_name_every_question(self, client: TestClient, course):
        ids = [q["id"] for q in course["questions"]]
        response = client.put(f"/courses/{course['id']}/questions/order", json={"question_ids": ids[:2]})
        assert response.status_code == 422
        response = client.put(f"/courses/{course['id']}/questions/order", json={"question_ids": ids + ids[:1]})
        assert response.status_code == 422

    def test_delete_course_keeps_questions(self, client: TestClient, course):
        response = client.delete(f"/courses/{course['id']}")
        assert response.status_code == 200
        assert client.get(f"/courses/{course['id']}").status_code == 404
        question_id = course["questions"][0]["id"]
        assert client.get(f"/questions/{question_id}").status_code == 200


@pytest.mark.api
class TestQuestionsAPI:
    def test_get_question(self, client: TestClient, course):
        question = course["questions"][0]
        response = client.get(f"/questions/{question['id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Introduce yourself"
        assert data["answer_content"] == "My name is apple"
        assert data["sort_position"] is None

    def test_update_title_and_answer(self, client: TestClient, course):
        question = course["questions"][0]
        response = client.put(
            f"/questions/{question['id']}",
            json={"title": "Who are you?", "answer_content": "I am apple"},
        )
        assert response.status_code == 200
        assert response.json()["title"] == "Who are you?"
        assert response.json()["answer_content"] == "I am apple"

    def test_update_adds_missing_answer(self, client: TestClient, course):
        blank = course["questions"][1]
        response = client.put(f"/questions/{blank['id']}", json={"answer_content": "now filled"})
        assert response.status_code == 200
        assert response.json()["answer_content"] == "now filled"
        assert response.json()["title"] == "Blank card"

    def test_delete_question_removes_it_from_course(self, client: TestClient, course):
        question = course["questions"][0]
        assert client.delete(f"/questions/{question['id']}").status_code == 200
        assert client.get(f"/questions/{question['id']}").status_code == 404
        remaining = client.get(f"/courses/{course['id']}/questions").json()
        assert question["id"] not in [q["id"] for q in remaining]

    def test_missing_question(self, client: TestClient):
        assert client.get("/questions/9999").status_code == 404
        assert client.put("/questions/9999", json={"title": "x"}).status_code == 404
        assert client.delete("/questions/9999").status_code == 404


@pytest.mark.api
class TestReorderWithNegativePositions:
    def test_reorder_when_a_question_sits_below_zero(self, client: TestClient):
        course = client.post("/courses/", json={"name": "Signed positions"}).json()
        first = client.post(f"/courses/{course['id']}/questions",
                            json={"title": "A", "answer_content": "a", "sort_order": 1}).json()
        second = client.post(f"/courses/{course['id']}/questions",
                             json={"title": "B", "answer_content": "b", "sort_order": -1}).json()

        response = client.put(f"/courses/{course['id']}/questions/order",
                              json={"question_ids": [first["id"], second["id"]]})
        assert response.status_code == 200
        data = response.json()
        assert [q["id"] for q in data] == [first["id"], second["id"]]
        assert [q["sort_position"] for q in data] == [1, 2]
