from tests.base import ApiTestCase

from store_api.database import async_session_maker
from store_api.users.models import AccessLevel, User, UserProfile
from store_api.users.service import add_user_with_profile


class TestUsers(ApiTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.admin = await self.create_user("admin", AccessLevel.ADMIN)
        self.alice = await self.create_user("Alice")

    async def test_duplicate_name_is_rejected(self):
        response = await self.client.post(
            "/users", json={"name": "Alice", "password": "pw"}, headers=self.auth(self.admin)
        )
        self.assertEqual(response.status_code, 409, response.text)
        self.assertEqual(await self.count(User, User.name == "Alice"), 1)

    async def test_two_users_without_names_are_allowed(self):
        async with async_session_maker() as session:
            await add_user_with_profile(session, None, "pw", AccessLevel.REGULAR)
            await add_user_with_profile(session, None, "pw", AccessLevel.REGULAR)
            await session.commit()
        self.assertEqual(await self.count(User, User.name.is_(None)), 2)

    async def test_create_user_gets_a_profile(self):
        response = await self.client.post(
            "/users", json={"name": "Bob", "password": "pw", "accessLevel": 2}, headers=self.auth(self.admin)
        )
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertEqual(body["accessLevel"], 2)
        self.assertEqual(body["userProfile"]["pagePreference"], 5)
        self.assertEqual(await self.count(UserProfile, UserProfile.user_id == body["id"]), 1)

    async def test_only_admin_creates_and_deletes_users(self):
        response = await self.client.post(
            "/users", json={"name": "Bob", "password": "pw"}, headers=self.auth(self.alice)
        )
        self.assertEqual(response.status_code, 403)

        response = await self.client.delete(f"/users/{self.admin.id}", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 403)
        self.assertIsNotNone(await self.fetch(User, self.admin.id))

    async def test_admin_cannot_delete_itself(self):
        response = await self.client.delete(f"/users/{self.admin.id}", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 400)

    async def test_rename_to_taken_name_conflicts(self):
        bob = await self.create_user("Bob")
        response = await self.client.put(f"/users/{bob.id}", json={"name": "Alice"}, headers=self.auth(bob))
        self.assertEqual(response.status_code, 409, response.text)
        self.assertEqual((await self.fetch(User, bob.id)).name, "Bob")

    async def test_user_updates_own_profile(self):
        response = await self.client.put(
            f"/users/{self.alice.id}",
            json={"userProfile": {"bio": "Hi there", "location": "Cluj", "maritalStatus": 1}},
            headers=self.auth(self.alice),
        )
        self.assertEqual(response.status_code, 200, response.text)
        profile = response.json()["userProfile"]
        self.assertEqual(profile["bio"], "Hi there")
        self.assertEqual(profile["location"], "Cluj")
        self.assertEqual(profile["maritalStatus"], 1)

    async def test_user_cannot_edit_someone_else(self):
        bob = await self.create_user("Bob")
        response = await self.client.put(f"/users/{bob.id}", json={"name": "Robert"}, headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 403)

    async def test_only_admin_changes_access_level(self):
        response = await self.client.put(
            f"/users/{self.alice.id}", json={"accessLevel": 3}, headers=self.auth(self.alice)
        )
        self.assertEqual(response.status_code, 403)

        response = await self.client.put(
            f"/users/{self.alice.id}", json={"accessLevel": 2}, headers=self.auth(self.admin)
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual((await self.fetch(User, self.alice.id)).access_level, AccessLevel.MODERATOR)

    async def test_search_is_case_insensitive(self):
        await self.create_user("alicia")
        await self.create_user("Bob")
        response = await self.client.get("/users/search", params={"query": "ALI"}, headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(sorted(u["name"] for u in response.json()), ["Alice", "alicia"])

    async def test_search_returns_at_most_twenty(self):
        async with async_session_maker() as session:
            for i in range(25):
                await add_user_with_profile(session, f"clerk{i}", "pw", AccessLevel.REGULAR)
            await session.commit()
        response = await self.client.get("/users/search", params={"query": "clerk"}, headers=self.auth(self.alice))
        self.assertEqual(len(response.json()), 20)

    async def test_paging_limit_is_capped(self):
        response = await self.client.get("/users/0/101", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 422)

        response = await self.client.get("/users/1/1", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([u["id"] for u in response.json()], [self.alice.id])

    async def test_user_detail_counts_owned_rows(self):
        await self.post_store(self.alice)
        await self.post_store(self.alice, name="Second")
        await self.post_role(self.alice)

        response = await self.client.get(f"/users/{self.alice.id}", headers=self.auth(self.admin))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["storeCount"], 2)
        self.assertEqual(body["storeEmployeeRoleCount"], 1)
        self.assertEqual(body["storeEmployeeCount"], 0)

    async def test_missing_user_is_404(self):
        response = await self.client.get("/users/9999", headers=self.auth(self.alice))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.text, "User not found")
