"""Common base class for route tests."""

import os
import shutil
import tempfile
import unittest

from hanghive import create_app
from hanghive.extensions import get_store


class BaseTestCase(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.data_file = os.path.join(self.temp_dir, "data", "database.json")
        self.app = create_app({"TESTING": True, "DATA_FILE": self.data_file})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self):
        self.app_context.pop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    @property
    def store(self):
        return get_store()

    def login(self, username):
        """Logs in as ``username`` and returns the user record."""
        response = self.client.post("/api/users/login", json={"username": username})
        self.assertEqual(response.status_code, 200)
        return response.get_json()["user"]

    def create_group(self, name, created_by):
        """Creates a group through the API and returns it."""
        response = self.client.post(
            "/api/groups", json={"name": name, "createdBy": created_by}
        )
        self.assertEqual(response.status_code, 200)
        return response.get_json()["group"]

    def join_group(self, code, username):
        return self.client.post(
            "/api/groups/join", json={"code": code, "username": username}
        )

    def create_hangout(self, group_id, proposed_by, **fields):
        """Proposes a hangout through the API and returns it."""
        payload = {
            "title": "Movie Night",
            "date": "2099-03-15",
            "time": "19:00",
            "location": "Jake's house",
            "description": "Bring snacks!",
            "proposedBy": proposed_by,
        }
        payload.update(fields)
        response = self.client.post(f"/api/groups/{group_id}/hangouts", json=payload)
        self.assertEqual(response.status_code, 200)
        return response.get_json()["hangout"]

    def send_message(self, group_id, text, sender):
        response = self.client.post(
            f"/api/groups/{group_id}/messages", json={"text": text, "sender": sender}
        )
        self.assertEqual(response.status_code, 200)
        return response.get_json()["message"]
