from concurrent.futures import ThreadPoolExecutor

from career_portal.services.mongo_service import JobService
from tests.conftest import make_job, register, skills


def add_skills(client, headers, *specs):
    client.post("/api/users/skills", headers=headers, json={
        "skills": [{"name": name, "level": level} for name, level in specs],
    })


def test_list_jobs_anonymous(client):
    make_job("Backend Developer", job_skills=skills(("Python", "advanced")))
    make_job("Closed Role", status="closed")

    response = client.get("/api/jobs")
    assert response.status_code == 200
    data = response.json()

    assert [j["title"] for j in data["jobs"]] == ["Backend Developer"]
    assert "match_score" not in data["jobs"][0]
    assert "applicants" not in data["jobs"][0]
    assert data["jobs"][0]["application_count"] == 0
    assert data["pagination"]["total_items"] == 1
    assert "internship" in data["filters"]["job_types"]


def test_list_jobs_scored_and_sorted_for_user(client, auth_headers):
    add_skills(client, auth_headers, ("Python", "expert"))
    make_job("Weak Match", job_skills=skills(("Java", "advanced"), ("Python", "beginner", False)))
    make_job("Strong Match", job_skills=skills(("Python", "expert")))

    jobs = client.get("/api/jobs", headers=auth_headers).json()["jobs"]

    assert [j["title"] for j in jobs] == ["Strong Match", "Weak Match"]
    assert [j["match_score"] for j in jobs] == [100, 33]


def test_list_jobs_unknown_sort_field_falls_back_to_match_order(client, auth_headers):
    add_skills(client, auth_headers, ("Python", "expert"))
    make_job("Weak Match", job_skills=skills(("Java", "advanced")))
    make_job("Strong Match", job_skills=skills(("Python", "expert")))

    response = client.get("/api/jobs?sort_by=bogus", headers=auth_headers)
    assert response.status_code == 200
    assert [j["title"] for j in response.json()["jobs"]] == ["Strong Match", "Weak Match"]


def test_list_jobs_filters(client):
    make_job("Data Intern", job_skills=skills(("SQL", "beginner")), job_type="internship")
    make_job("Web Developer", job_skills=skills(("React", "advanced")), work_arrangement="remote")

    def titles(**params):
        return [j["title"] for j in client.get("/api/jobs", params=params).json()["jobs"]]

    assert titles(job_type="internship") == ["Data Intern"]
    assert titles(work_arrangement="remote") == ["Web Developer"]
    assert titles(skills="react, go") == ["Web Developer"]
    assert titles(search="intern") == ["Data Intern"]
    assert len(titles(company="acm")) == 2
    assert titles(company="globex") == []
    assert client.get("/api/jobs", params={"job_type": "gig"}).status_code == 422


def test_list_jobs_pagination(client):
    for i in range(3):
        make_job(f"Job {i}")
    data = client.get("/api/jobs", params={"page": 2, "limit": 2}).json()

    assert len(data["jobs"]) == 1
    assert data["pagination"] == {
        "current_page": 2, "total_pages": 2, "total_items": 3, "has_next": False, "has_prev": True,
    }


def test_job_detail(client, auth_headers):
    add_skills(client, auth_headers, ("Python", "advanced"))
    job = make_job(job_skills=skills(("Python", "intermediate"), ("SQL", "beginner")))

    data = client.get(f"/api/jobs/{job.id}", headers=auth_headers).json()["job"]

    assert data["match_score"] == 25
    assert data["has_applied"] is False
    assert data["skill_gaps"] == ["sql"]
    assert data["views"] == 1
    assert JobService().get(job.id).views == 1


def test_job_detail_anonymous(client):
    job = make_job()
    data = client.get(f"/api/jobs/{job.id}").json()["job"]
    assert "match_score" not in data
    assert "has_applied" not in data


def test_job_detail_not_found(client):
    assert client.get("/api/jobs/not-an-id").status_code == 404
    assert client.get("/api/jobs/507f1f77bcf86cd799439011").status_code == 404


def test_apply_once(client, auth_headers):
    add_skills(client, auth_headers, ("Python", "expert"))
    job = make_job("Backend Developer", company="Acme", job_skills=skills(("Python", "expert")))

    first = client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers)
    assert first.status_code == 200
    application = first.json()["application"]
    assert application["match_score"] == 100
    assert application["status"] == "applied"
    assert application["company"] == "Acme"

    second = client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers)
    assert second.status_code == 400
    assert second.json()["detail"] == "You have already applied to this job"

    stored = JobService().get(job.id)
    assert len(stored.applicants) == 1
    assert stored.applications == 1

    detail = client.get(f"/api/jobs/{job.id}", headers=auth_headers).json()["job"]
    assert detail["has_applied"] is True
    assert detail["application_count"] == 1


def test_apply_logs_activity(client, auth_headers):
    job = make_job("Backend Developer", company="Acme")
    client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers)

    timeline = client.get("/api/progress/timeline", headers=auth_headers).json()["timeline"]
    applied = [a for day in timeline.values() for a in day if a["action"] == "job_applied"]
    assert applied[0]["description"] == "Applied to Backend Developer at Acme"
    assert applied[0]["type"] == "job"
    assert applied[0]["metadata"]["job_id"] == job.id


def test_apply_to_closed_job(client, auth_headers):
    job = make_job(status="closed")
    assert client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers).status_code == 400


def test_concurrent_duplicate_applies_store_one_applicant(client, auth_headers):
    job = make_job("Backend Developer")

    def apply(_):
        return client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers).status_code

    with ThreadPoolExecutor(max_workers=8) as pool:
        codes = sorted(pool.map(apply, range(8)))

    assert codes == [200] + [400] * 7
    stored = JobService().get(job.id)
    assert len(stored.applicants) == 1
    assert stored.applications == 1


def test_apply_when_job_closes_before_update(client, auth_headers, monkeypatch):
    job = make_job("Backend Developer", status="closed")
    real_get = JobService.get
    reads = []

    # first read sees the job while it was still active
    def stale_get(self, job_id):
        found = real_get(self, job_id)
        if not reads:
            found.status = "active"
        reads.append(job_id)
        return found

    monkeypatch.setattr(JobService, "get", stale_get)
    response = client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Job is no longer accepting applications"
    assert len(reads) == 2
    assert real_get(JobService(), job.id).applicants == []


def test_apply_requires_auth(client):
    job = make_job()
    assert client.post(f"/api/jobs/{job.id}/apply").status_code in (401, 403)


def test_apply_unknown_job(client, auth_headers):
    response = client.post("/api/jobs/507f1f77bcf86cd799439011/apply", headers=auth_headers)
    assert response.status_code == 404


def test_other_users_can_apply(client, auth_headers):
    job = make_job()
    client.post(f"/api/jobs/{job.id}/apply", headers=auth_headers)

    token = register(client, email="grace@example.com", first_name="Grace", last_name="Hopper")["access_token"]
    response = client.post(f"/api/jobs/{job.id}/apply", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert len(JobService().get(job.id).applicants) == 2


def test_my_applications(client, auth_headers):
    first = make_job("First")
    second = make_job("Second")
    make_job("Untouched")
    client.post(f"/api/jobs/{first.id}/apply", headers=auth_headers)
    client.post(f"/api/jobs/{second.id}/apply", headers=auth_headers)

    data = client.get("/api/jobs/user/applications", headers=auth_headers).json()

    assert sorted(a["title"] for a in data["applications"]) == ["First", "Second"]
    assert data["status_counts"]["applied"] == 2
    assert data["status_counts"]["offer"] == 0
    assert data["pagination"]["total_items"] == 2

    filtered = client.get(
        "/api/jobs/user/applications", headers=auth_headers, params={"status": "interview"}
    ).json()
    assert filtered["applications"] == []
    assert filtered["status_counts"]["applied"] == 2


def test_recommendations_threshold_and_preferences(client, auth_headers):
    add_skills(client, auth_headers, ("Python", "expert"), ("SQL", "beginner"))
    client.put("/api/users/profile", headers=auth_headers, json={"preferences": {"job_types": ["internship"]}})

    make_job("Python Intern", job_skills=skills(("Python", "advanced")), job_type="internship")
    make_job("SQL Intern", job_skills=skills(("SQL", "expert")), job_type="internship")
    make_job("Java Intern", job_skills=skills(("Java", "beginner")), job_type="internship")
    make_job("Python Full Time", job_skills=skills(("Python", "advanced")))

    data = client.get("/api/jobs/recommendations", headers=auth_headers).json()

    # SQL Intern scores exactly 25, Java Intern 0
    assert [j["title"] for j in data["recommendations"]] == ["Python Intern", "SQL Intern"]
    assert [j["match_score"] for j in data["recommendations"]] == [75, 25]


def test_recommendations_empty(client, auth_headers):
    make_job(job_skills=skills(("Java", "beginner")))
    data = client.get("/api/jobs/recommendations", headers=auth_headers).json()
    assert data["recommendations"] == []
    assert data["message"].startswith("No recommendations found")
