import requests


class ScreeningAPIError(Exception):
    def __init__(self, status_code, message):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ScreeningClient:
    """Thin requests wrapper over the screening HTTP API, used by the dashboard."""

    def __init__(self, base_url, session=None, timeout=90):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method, path, **kwargs):
        r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        if r.status_code >= 400:
            try:
                message = r.json().get("error", r.text)
            except ValueError:
                message = r.text
            raise ScreeningAPIError(r.status_code, message)
        return r.json()

    def create_screening(self, screening_id, job_title, company_name, job_description,
                         candidate_name=None, candidate_email=None):
        payload = {
            "id": screening_id,
            "jobTitle": job_title,
            "companyName": company_name,
            "jobDescription": job_description,
        }
        if candidate_name:
            payload["candidateName"] = candidate_name
        if candidate_email:
            payload["candidateEmail"] = candidate_email
        return self._call("POST", "/screening", json=payload)

    def get_prompt(self, screening_id):
        return self._call("GET", f"/screening/{screening_id}")["prompt"]

    def start(self, screening_id, candidate_name, candidate_email):
        return self._call(
            "POST",
            f"/screening/{screening_id}/start",
            json={"candidateName": candidate_name, "candidateEmail": candidate_email},
        )

    def respond(self, screening_id, messages):
        return self._call("POST", f"/screening/{screening_id}/respond", json={"messages": messages})["reply"]

    def list_recent(self, limit=None):
        params = {"limit": limit} if limit else None
        return self._call("GET", "/debug/screenings", params=params)
