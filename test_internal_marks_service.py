import threading

import pytest
import requests

from portal.core.errors import ValidationFailed
from portal.core.session import RequestTracker
from portal.services import internal_marks_service as svc

MARKS_PATH = "/teacher/subjects/sub1/internal-marks"


def test_duplicate_found(client, fake_http):
    fake_http.add("GET", MARKS_PATH, {"marks": [{"_id": "m1"}]})

    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz") is True
    assert fake_http.calls[0]["params"] == {"division": "A", "examType": "Quiz"}


def test_no_duplicate_when_list_empty(client, fake_http):
    fake_http.add("GET", MARKS_PATH, {"marks": []})
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz") is False


def test_edited_mark_is_not_its_own_duplicate(client, fake_http):
    fake_http.add("GET", MARKS_PATH, {"marks": [{"_id": "m1"}]})
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz", exclude_mark_id="m1") is False

    fake_http.add("GET", MARKS_PATH, {"marks": [{"_id": "m1"}, {"_id": "m2"}]})
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz", exclude_mark_id="m1") is True


def test_duplicate_check_returns_false_when_fetch_fails(client, fake_http):
    fake_http.fail("GET", MARKS_PATH, requests.ConnectionError("down"))
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz") is False

    fake_http.add("GET", MARKS_PATH, {"message": "Server exploded"}, status=500)
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz") is False


def test_duplicate_check_tolerates_odd_body(client, fake_http):
    fake_http.add("GET", MARKS_PATH, ["unexpected"])
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz") is False


def test_duplicate_check_skips_entries_that_are_not_marks(client, fake_http):
    fake_http.add("GET", MARKS_PATH, {"marks": ["m1"]})
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz", exclude_mark_id="m9") is False

    fake_http.add("GET", MARKS_PATH, {"marks": ["m1", {"_id": "m2"}]})
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz", exclude_mark_id="m9") is True

    fake_http.add("GET", MARKS_PATH, {"marks": "m1"})
    assert svc.check_duplicate_exam_type(client, "sub1", "A", "Quiz") is False


def test_submit_valid_marks_posts_payload(client, fake_http):
    fake_http.add("POST", MARKS_PATH, {"message": "Internal marks added successfully"}, status=201)
    payload = {
        "division": "A",
        "examType": "Internal 2",
        "maxMarks": 25,
        "examDate": "2024-04-02",
        "marksData": [{"studentId": "s1", "obtainedMarks": 20}],
    }

    assert svc.submit_internal_marks(client, "sub1", payload)["message"] == "Internal marks added successfully"
    assert fake_http.calls[0]["json"] == payload


def test_submit_invalid_marks_makes_no_call(client, fake_http):
    payload = {
        "division": "A",
        "examType": "Internal 2",
        "maxMarks": 25,
        "examDate": "2024-04-02",
        "marksData": [{"studentId": "s1", "obtainedMarks": 30}],
    }
    with pytest.raises(ValidationFailed) as exc:
        svc.submit_internal_marks(client, "sub1", payload)

    assert exc.value.errors == ["Obtained marks cannot exceed maximum marks for record 1"]
    assert fake_http.calls == []


def test_update_and_delete_paths(client, fake_http):
    fake_http.add("PUT", "/teacher/internal-marks/m1", {"message": "updated"})
    fake_http.add("DELETE", "/teacher/internal-marks/m1", {"message": "deleted"})
    fake_http.add("GET", "/teacher/subjects/sub1/student-performance", {"summary": {}})

    assert svc.update_internal_marks(client, "m1", {"obtainedMarks": 12})["message"] == "updated"
    assert svc.delete_internal_marks(client, "m1")["message"] == "deleted"
    assert svc.get_student_performance_summary(client, "sub1", {"studentId": "s1"}) == {"summary": {}}
    assert fake_http.calls[0]["json"] == {"obtainedMarks": 12}


def test_load_subject_marks_formats_and_summarises(client, fake_http):
    fake_http.add(
        "GET",
        MARKS_PATH,
        {
            "marks": [
                {"_id": "m1", "obtainedMarks": 45, "maxMarks": 50, "examDate": "2024-03-05"},
                {"_id": "m2", "obtainedMarks": 35, "maxMarks": 50, "examDate": "2024-03-05"},
            ]
        },
    )
    result = svc.load_subject_marks(client, RequestTracker(), "sub1", {"division": "A"})

    assert result["subjectId"] == "sub1"
    assert [m["grade"] for m in result["marks"]] == ["A+", "B+"]
    assert result["statistics"] == {"totalStudents": 2, "averageMarks": "40.00", "averagePercentage": "80.00"}


def test_backend_statistics_preferred(client, fake_http):
    backend_stats = {"totalStudents": 30, "averageMarks": "18.20", "averagePercentage": "72.80"}
    fake_http.add("GET", MARKS_PATH, {"marks": [], "statistics": backend_stats})

    result = svc.load_subject_marks(client, RequestTracker(), "sub1")
    assert result["statistics"] == backend_stats


def test_stale_load_is_discarded(client, fake_http):
    tracker = RequestTracker()
    fake_http.add("GET", MARKS_PATH, {"marks": []})

    # a newer selection starts while the first fetch is still in flight
    original_request = fake_http.request

    def slow_request(*args, **kwargs):
        tracker.begin("marks")
        return original_request(*args, **kwargs)

    fake_http.request = slow_request
    assert svc.load_subject_marks(client, tracker, "sub1") is None


def test_tracker_tokens_are_thread_safe():
    tracker = RequestTracker()
    tokens = []

    def worker():
        for _ in range(100):
            tokens.append(tracker.begin("marks"))

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(tokens) == list(range(1, 401))
    assert tracker.is_current("marks", 400)
    assert not tracker.is_current("marks", 399)
    assert tracker.begin("attendance") == 401
    assert tracker.apply_if_current("attendance", 401, "fresh") == "fresh"
    assert len(tracker) == 1


def test_load_subject_marks_across_exams_with_different_maximums(client, fake_http):
    fake_http.add(
        "GET",
        MARKS_PATH,
        {
            "marks": [
                {"_id": "m1", "obtainedMarks": 10, "maxMarks": 10, "examType": "Quiz"},
                {"_id": "m2", "obtainedMarks": 50, "maxMarks": 100, "examType": "Internal 1"},
            ]
        },
    )
    result = svc.load_subject_marks(client, RequestTracker(), "sub1")

    assert result["statistics"]["averagePercentage"] == "75.00"
    assert float(result["statistics"]["averagePercentage"]) <= 100


def test_tracker_forgets_delivered_keys():
    tracker = RequestTracker()
    for i in range(1000):
        key = f"marks:token-{i}"
        token = tracker.begin(key)
        assert tracker.apply_if_current(key, token, i) == i

    assert len(tracker) == 0


def test_tracker_is_bounded_and_evicted_results_are_stale():
    tracker = RequestTracker(max_keys=2)
    first = tracker.begin("a")
    tracker.begin("b")
    tracker.begin("c")

    assert len(tracker) == 2
    assert tracker.apply_if_current("a", first, "late") is None


def test_tracker_token_is_not_reused_after_delivery():
    tracker = RequestTracker()
    old = tracker.begin("marks")
    newer = tracker.begin("marks")
    assert tracker.apply_if_current("marks", newer, "new") == "new"

    # the key starts over, but the old in-flight token still loses
    tracker.begin("marks")
    assert tracker.apply_if_current("marks", old, "old") is None
