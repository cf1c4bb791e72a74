from locust import HttpUser, task, between
import itertools

_ids = itertools.count(1)


class HRDirectoryUser(HttpUser):
    # Wait time between tasks (simulates user think time)
    wait_time = between(1, 3)

    def on_start(self):
        # Every simulated user works inside its own department
        response = self.client.post("/api/departments", json={"name": "Load test", "budget": 1000})
        self.department_id = response.json()["data"]["id"]

    @task(3)
    def list_departments(self):
        self.client.get("/api/departments", params={"include": "employees"})

    @task(3)
    def list_employees(self):
        self.client.get("/api/employees")

    @task
    def hire_and_fire(self):
        # Creates an employee under this user's department, then removes it
        payload = {
            "firstName": "Load",
            "lastName": "Test",
            "email": f"load{next(_ids)}-{id(self)}@corp.com",
            "position": "Tester",
            "hireDate": "2024-01-01",
            "departmentId": self.department_id,
        }
        response = self.client.post("/api/employees", json=payload)
        if response.status_code == 201:
            employee_id = response.json()["data"]["id"]
            self.client.delete(f"/api/employees/{employee_id}", name="/api/employees/[id]")
