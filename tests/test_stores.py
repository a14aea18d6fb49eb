from tests.base import ApiTestCase

from store_api.stores.models import Store
from store_api.users.models import AccessLevel


class TestStores(ApiTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.owner = await self.create_user("owner")
        self.other = await self.create_user("other")
        self.moderator = await self.create_user("mod", AccessLevel.MODERATOR)

    async def test_create_sets_owner(self):
        store = await self.post_store(self.owner, name="Corner Shop", city="Cluj", category=2)
        self.assertEqual(store["userId"], self.owner.id)
        self.assertEqual(store["category"], 2)
        self.assertEqual(store["city"], "Cluj")

    async def test_close_before_open_is_422(self):
        response = await self.client.post(
            "/stores",
            json={"name": "Acme", "openDate": "2024-02-01T00:00:00", "closeDate": "2024-01-01T00:00:00"},
            headers=self.auth(self.owner),
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(await self.count(Store), 0)

    async def test_unknown_category_is_422(self):
        response = await self.client.post("/stores", json={"name": "Acme", "category": 42}, headers=self.auth(self.owner))
        self.assertEqual(response.status_code, 422)

    async def test_owner_updates_store(self):
        store = await self.post_store(self.owner)
        response = await self.client.put(
            f"/stores/{store['id']}", json={"name": "Acme Two"}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["name"], "Acme Two")
        self.assertEqual((await self.fetch(Store, store["id"])).name, "Acme Two")

    async def test_partial_update_cannot_reverse_stored_dates(self):
        store = await self.post_store(
            self.owner, openDate="2020-01-01T00:00:00", closeDate="2021-01-01T00:00:00"
        )
        response = await self.client.put(
            f"/stores/{store['id']}", json={"openDate": "2022-01-01T00:00:00"}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 422, response.text)
        self.assertEqual(response.text, "closeDate must not be earlier than openDate")

        row = await self.fetch(Store, store["id"])
        self.assertEqual(row.open_date.year, 2020)
        response = await self.client.get("/stores", headers=self.auth(self.owner))
        self.assertEqual(response.status_code, 200)

    async def test_partial_update_within_stored_dates(self):
        store = await self.post_store(
            self.owner, openDate="2020-01-01T00:00:00", closeDate="2021-01-01T00:00:00"
        )
        response = await self.client.put(
            f"/stores/{store['id']}", json={"openDate": "2020-06-01T00:00:00"}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["openDate"], "2020-06-01T00:00:00")

    async def test_non_owner_cannot_modify(self):
        store = await self.post_store(self.owner)
        response = await self.client.put(f"/stores/{store['id']}", json={"name": "Mine"}, headers=self.auth(self.other))
        self.assertEqual(response.status_code, 403)
        response = await self.client.delete(f"/stores/{store['id']}", headers=self.auth(self.other))
        self.assertEqual(response.status_code, 403)
        self.assertIsNotNone(await self.fetch(Store, store["id"]))

    async def test_moderator_can_modify_any_store(self):
        store = await self.post_store(self.owner)
        response = await self.client.put(
            f"/stores/{store['id']}", json={"name": "Moderated"}, headers=self.auth(self.moderator)
        )
        self.assertEqual(response.status_code, 200)
        response = await self.client.delete(f"/stores/{store['id']}", headers=self.auth(self.moderator))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.text, f"Successfully deleted store {store['id']}.")

    async def test_missing_store_is_404(self):
        for method in ("get", "delete"):
            response = await getattr(self.client, method)("/stores/404", headers=self.auth(self.owner))
            self.assertEqual(response.status_code, 404)

    async def test_paging(self):
        ids = [(await self.post_store(self.owner, name=f"Store {i}"))["id"] for i in range(5)]
        response = await self.client.get("/stores/1/2", headers=self.auth(self.other))
        self.assertEqual([s["id"] for s in response.json()], ids[1:3])

        response = await self.client.get("/stores", params={"offset": 3}, headers=self.auth(self.other))
        self.assertEqual([s["id"] for s in response.json()], ids[3:])

        response = await self.client.get("/stores/0/0", headers=self.auth(self.other))
        self.assertEqual(response.status_code, 422)

    async def test_search_by_name(self):
        await self.post_store(self.owner, name="Golden Market")
        await self.post_store(self.owner, name="Silver Depot")
        await self.post_store(self.owner, name="market 100%")

        response = await self.client.get("/stores/search", params={"query": "MARKET"}, headers=self.auth(self.other))
        self.assertEqual(sorted(s["name"] for s in response.json()), ["Golden Market", "market 100%"])

        response = await self.client.get("/stores/search", params={"query": "%"}, headers=self.auth(self.other))
        self.assertEqual([s["name"] for s in response.json()], ["market 100%"])

    async def test_detail_lists_shifts(self):
        store = await self.post_store(self.owner)
        jo = await self.post_employee(self.owner)
        await self.post_shift(self.owner, store["id"], jo["id"])

        response = await self.client.get(f"/stores/{store['id']}", headers=self.auth(self.other))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["storeEmployeeId"] for s in response.json()["storeShifts"]], [jo["id"]])


class TestStoreReports(ApiTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.user = await self.create_user("analyst")
        self.big = await self.post_store(self.user, name="Big")
        self.small = await self.post_store(self.user, name="Small")
        self.empty = await self.post_store(self.user, name="Empty")

        rich = await self.post_employee(self.user, firstName="Rich", salary=9000)
        mid = await self.post_employee(self.user, firstName="Mid", salary=5000)
        poor = await self.post_employee(self.user, firstName="Poor", salary=1000)
        for employee in (rich, mid, poor):
            await self.post_shift(self.user, self.big["id"], employee["id"])
        await self.post_shift(self.user, self.small["id"], rich["id"])

    async def test_salary_report_orders_by_average(self):
        response = await self.client.get("/stores/salaryreport/0/10", headers=self.auth(self.user))
        self.assertEqual(response.status_code, 200, response.text)
        rows = response.json()
        # stores without shifts have no average
        self.assertEqual([r["name"] for r in rows], ["Small", "Big"])
        self.assertAlmostEqual(rows[0]["averageSalary"], 9000)
        self.assertAlmostEqual(rows[1]["averageSalary"], 5000)

    async def test_headcount_report_includes_empty_stores(self):
        response = await self.client.get("/stores/headcountreport/0/10", headers=self.auth(self.user))
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(
            [(r["name"], r["headcount"]) for r in response.json()],
            [("Big", 3), ("Small", 1), ("Empty", 0)],
        )

    async def test_report_paging(self):
        response = await self.client.get("/stores/headcountreport/1/1", headers=self.auth(self.user))
        self.assertEqual([r["name"] for r in response.json()], ["Small"])


class TestEmployeesAndRoles(ApiTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.owner = await self.create_user("owner")

    async def test_employee_with_missing_role_is_404(self):
        response = await self.client.post(
            "/storeemployees",
            json={"firstName": "Jo", "storeEmployeeRoleId": 77},
            headers=self.auth(self.owner),
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.text, "Role with id 77 does not exist")

    async def test_partial_update_cannot_move_employment_past_termination(self):
        jo = await self.post_employee(
            self.owner, employmentDate="2020-01-01T00:00:00", terminationDate="2021-01-01T00:00:00"
        )
        response = await self.client.put(
            f"/storeemployees/{jo['id']}",
            json={"employmentDate": "2022-01-01T00:00:00"},
            headers=self.auth(self.owner),
        )
        self.assertEqual(response.status_code, 422, response.text)

        response = await self.client.get("/storeemployees", headers=self.auth(self.owner))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["employmentDate"], "2020-01-01T00:00:00")

    async def test_negative_salary_is_422(self):
        response = await self.client.post(
            "/storeemployees", json={"firstName": "Jo", "salary": -1}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 422)

    async def test_employee_detail_has_role_and_shifts(self):
        role = await self.post_role(self.owner, name="Manager")
        jo = await self.post_employee(self.owner, storeEmployeeRoleId=role["id"])
        store = await self.post_store(self.owner)
        await self.post_shift(self.owner, store["id"], jo["id"])

        response = await self.client.get(f"/storeemployees/{jo['id']}", headers=self.auth(self.owner))
        body = response.json()
        self.assertEqual(body["storeEmployeeRole"]["name"], "Manager")
        self.assertEqual([s["storeId"] for s in body["storeShifts"]], [store["id"]])

    async def test_role_detail_lists_employees(self):
        role = await self.post_role(self.owner)
        jo = await self.post_employee(self.owner, storeEmployeeRoleId=role["id"])
        await self.post_employee(self.owner, firstName="Ann")

        response = await self.client.get(f"/storeemployeeroles/{role['id']}", headers=self.auth(self.owner))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([e["id"] for e in response.json()["storeEmployees"]], [jo["id"]])

    async def test_employee_search_matches_either_name(self):
        await self.post_employee(self.owner, firstName="Maria", lastName="Pop")
        await self.post_employee(self.owner, firstName="Ion", lastName="Mariescu")
        await self.post_employee(self.owner, firstName="Dan", lastName="Stan")

        response = await self.client.get(
            "/storeemployees/search", params={"query": "mari"}, headers=self.auth(self.owner)
        )
        self.assertEqual(sorted(e["firstName"] for e in response.json()), ["Ion", "Maria"])

    async def test_salary_filter(self):
        for salary in (1000, 2500, 4000, 7000):
            await self.post_employee(self.owner, salary=salary)

        response = await self.client.get(
            "/storeemployees/filter", params={"minSalary": 2000, "offset": 0, "limit": 2}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([e["salary"] for e in response.json()], [2500, 4000])

    async def test_role_update_by_owner(self):
        role = await self.post_role(self.owner)
        response = await self.client.put(
            f"/storeemployeeroles/{role['id']}", json={"roleLevel": 4}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["roleLevel"], 4)
