from tests.base import ApiTestCase

from store_api.shifts.models import StoreShift
from store_api.users.models import AccessLevel


class TestShifts(ApiTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.owner = await self.create_user("owner")
        self.other = await self.create_user("other")
        self.store = await self.post_store(self.owner)
        self.employee = await self.post_employee(self.owner)

    def shift_url(self, store_id=None, employee_id=None):
        return f"/storeshifts/{store_id or self.store['id']}/{employee_id or self.employee['id']}"

    async def test_create_and_get(self):
        response = await self.post_shift(self.owner, self.store["id"], self.employee["id"])
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["userId"], self.owner.id)

        response = await self.client.get(self.shift_url(), headers=self.auth(self.other))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["startDate"], "2024-05-01T08:00:00")

    async def test_missing_store_or_employee_is_404(self):
        response = await self.post_shift(self.owner, 999, self.employee["id"])
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.text, "Store with id 999 does not exist")

        response = await self.post_shift(self.owner, self.store["id"], 999)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.text, "Employee with id 999 does not exist")
        self.assertEqual(await self.count(StoreShift), 0)

    async def test_duplicate_pair_conflicts(self):
        await self.post_shift(self.owner, self.store["id"], self.employee["id"])
        response = await self.post_shift(
            self.other, self.store["id"], self.employee["id"], startDate="2024-06-01T08:00:00", endDate=None
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(await self.count(StoreShift), 1)

    async def test_end_before_start_is_422(self):
        response = await self.post_shift(
            self.owner, self.store["id"], self.employee["id"], endDate="2024-05-01T07:00:00"
        )
        self.assertEqual(response.status_code, 422)

    async def test_update_changes_times_only(self):
        await self.post_shift(self.owner, self.store["id"], self.employee["id"])
        response = await self.client.put(
            self.shift_url(),
            json={"startDate": "2024-05-02T09:00:00", "endDate": "2024-05-02T17:00:00", "storeId": 12345},
            headers=self.auth(self.owner),
        )
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["storeId"], self.store["id"])
        self.assertEqual(body["endDate"], "2024-05-02T17:00:00")

    async def test_partial_update_cannot_start_after_stored_end(self):
        await self.post_shift(self.owner, self.store["id"], self.employee["id"])
        response = await self.client.put(
            self.shift_url(), json={"startDate": "2030-01-01T00:00:00"}, headers=self.auth(self.owner)
        )
        self.assertEqual(response.status_code, 422, response.text)

        shift = await self.fetch(StoreShift, (self.store["id"], self.employee["id"]))
        self.assertEqual(shift.start_date.year, 2024)

    async def test_non_owner_cannot_update_or_delete(self):
        await self.post_shift(self.owner, self.store["id"], self.employee["id"])
        response = await self.client.put(
            self.shift_url(), json={"endDate": "2024-05-01T18:00:00"}, headers=self.auth(self.other)
        )
        self.assertEqual(response.status_code, 403)
        response = await self.client.delete(self.shift_url(), headers=self.auth(self.other))
        self.assertEqual(response.status_code, 403)

    async def test_admin_deletes_any_shift(self):
        admin = await self.create_user("admin", AccessLevel.ADMIN)
        await self.post_shift(self.owner, self.store["id"], self.employee["id"])
        response = await self.client.delete(self.shift_url(), headers=self.auth(admin))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(await self.count(StoreShift), 0)

    async def test_missing_shift_is_404(self):
        response = await self.client.get(self.shift_url(employee_id=555), headers=self.auth(self.owner))
        self.assertEqual(response.status_code, 404)

    async def test_paging_orders_by_key(self):
        second_store = await self.post_store(self.owner, name="Second")
        ann = await self.post_employee(self.owner, firstName="Ann")
        await self.post_shift(self.owner, second_store["id"], self.employee["id"])
        await self.post_shift(self.owner, self.store["id"], ann["id"])
        await self.post_shift(self.owner, self.store["id"], self.employee["id"])

        response = await self.client.get("/storeshifts/page/0/2", headers=self.auth(self.owner))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            [(s["storeId"], s["storeEmployeeId"]) for s in response.json()],
            [(self.store["id"], self.employee["id"]), (self.store["id"], ann["id"])],
        )

        response = await self.client.get("/storeshifts", params={"offset": 2}, headers=self.auth(self.owner))
        self.assertEqual([s["storeId"] for s in response.json()], [second_store["id"]])
