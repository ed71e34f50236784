"""
Integration tests for task API endpoints.
Tests status codes, authentication and ownership end-to-end.
"""
import json

from django.test import Client, TestCase

from apps.identity.jwt_auth import create_access_token
from apps.identity.models import User
from apps.tasks.models import Priority, Task


class TaskAPITestCase(TestCase):

    def setUp(self):
        self.client = Client()
        self.owner = User.objects.create(email='owner@example.com', password_hash='x')
        self.other = User.objects.create(email='other@example.com', password_hash='x')
        self.auth = {'Authorization': f'Bearer {create_access_token(self.owner.id, self.owner.email)}'}

    def send(self, method, url, data=None):
        kwargs = {'headers': self.auth}
        if data is not None:
            kwargs.update(data=json.dumps(data), content_type='application/json')
        return getattr(self.client, method)(url, **kwargs)


class AuthenticationTest(TaskAPITestCase):

    def test_requires_token(self):
        response = self.client.get('/api/tasks')

        self.assertEqual(response.status_code, 401)
        body = response.json()
        self.assertEqual(body['code'], 'Auth.Unauthorized')
        self.assertEqual(body['path'], '/api/tasks')

    def test_rejects_invalid_token(self):
        response = self.client.get('/api/tasks', headers={'Authorization': 'Bearer not-a-token'})
        self.assertEqual(response.status_code, 401)


class TaskCrudAPITest(TaskAPITestCase):

    def test_create(self):
        response = self.send('post', '/api/tasks', {'title': 'Write tests', 'priority': 2})

        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body['title'], 'Write tests')
        self.assertEqual(body['priority'], 2)
        self.assertEqual(body['description'], '')
        self.assertFalse(body['is_complete'])
        self.assertEqual(body['user_id'], self.owner.id)
        self.assertTrue(Task.objects.filter(pk=body['id'], user=self.owner).exists())

    def test_create_validation(self):
        response = self.send('post', '/api/tasks', {'title': ''})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'Validation.Error')

    def test_create_rejects_unknown_priority(self):
        response = self.send('post', '/api/tasks', {'title': 'x', 'priority': 7})
        self.assertEqual(response.status_code, 400)

    def test_list_only_own_tasks(self):
        Task.objects.create(user=self.owner, title='second', sort_order=1)
        Task.objects.create(user=self.owner, title='first', sort_order=0, is_complete=True)
        Task.objects.create(user=self.other, title='theirs')

        response = self.send('get', '/api/tasks')

        self.assertEqual(response.status_code, 200)
        self.assertEqual([task['title'] for task in response.json()], ['first', 'second'])

    def test_list_filtered_by_completion(self):
        Task.objects.create(user=self.owner, title='open')
        Task.objects.create(user=self.owner, title='done', is_complete=True)

        response = self.send('get', '/api/tasks?is_complete=false')

        self.assertEqual([task['title'] for task in response.json()], ['open'])

    def test_get(self):
        task = Task.objects.create(user=self.owner, title='Mine', priority=Priority.LOW)

        response = self.send('get', f'/api/tasks/{task.id}')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['title'], 'Mine')
        self.assertEqual(response.json()['priority'], 0)

    def test_get_missing(self):
        response = self.send('get', '/api/tasks/99999')

        self.assertEqual(response.status_code, 404)
        body = response.json()
        self.assertEqual(body['code'], 'Task.NotFound')
        self.assertEqual(body['message'], 'Task with ID 99999 was not found.')

    def test_get_foreign_task_is_forbidden(self):
        task = Task.objects.create(user=self.other, title='Theirs')

        response = self.send('get', f'/api/tasks/{task.id}')

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['code'], 'Task.NotOwned')

    def test_update(self):
        task = Task.objects.create(user=self.owner, title='Old')

        response = self.send('put', f'/api/tasks/{task.id}', {
            'title': 'New', 'description': 'details', 'is_complete': True, 'priority': 2, 'sort_order': 3,
        })

        self.assertEqual(response.status_code, 200)
        task.refresh_from_db()
        self.assertEqual(task.title, 'New')
        self.assertEqual(task.description, 'details')
        self.assertTrue(task.is_complete)
        self.assertEqual(task.priority, Priority.HIGH)
        self.assertEqual(task.sort_order, 3)

    def test_delete(self):
        task = Task.objects.create(user=self.owner, title='Bye')

        response = self.send('delete', f'/api/tasks/{task.id}')

        self.assertEqual(response.status_code, 204)
        self.assertFalse(Task.objects.filter(pk=task.id).exists())
        self.assertEqual(self.send('get', f'/api/tasks/{task.id}').status_code, 404)

    def test_delete_foreign_task(self):
        task = Task.objects.create(user=self.other, title='Theirs')

        response = self.send('delete', f'/api/tasks/{task.id}')

        self.assertEqual(response.status_code, 403)
        self.assertTrue(Task.objects.filter(pk=task.id).exists())

    def test_toggle_complete(self):
        task = Task.objects.create(user=self.owner, title='Flip')

        response = self.send('patch', f'/api/tasks/{task.id}/toggle-complete')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['is_complete'])


class PaginationAPITest(TaskAPITestCase):

    def setUp(self):
        super().setUp()
        Task.objects.bulk_create([
            Task(user=self.owner, title=f'task {index}', sort_order=index) for index in range(5)
        ])

    def test_paginated(self):
        response = self.send('get', '/api/tasks/paginated?page=2&page_size=2')

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([task['title'] for task in body['items']], ['task 2', 'task 3'])
        self.assertEqual(body['total_count'], 5)
        self.assertEqual(body['total_pages'], 3)
        self.assertTrue(body['has_previous_page'])
        self.assertTrue(body['has_next_page'])

    def test_defaults(self):
        body = self.send('get', '/api/tasks/paginated').json()

        self.assertEqual(body['page'], 1)
        self.assertEqual(body['page_size'], 10)
        self.assertEqual(len(body['items']), 5)

    def test_page_size_is_capped(self):
        body = self.send('get', '/api/tasks/paginated?page_size=1000').json()
        self.assertEqual(body['page_size'], 100)


class OrderingAPITest(TaskAPITestCase):

    def setUp(self):
        super().setUp()
        self.a = Task.objects.create(user=self.owner, title='a', sort_order=0)
        self.b = Task.objects.create(user=self.owner, title='b', sort_order=1)
        self.foreign = Task.objects.create(user=self.other, title='theirs', sort_order=0)

    def titles(self):
        return [task['title'] for task in self.send('get', '/api/tasks').json()]

    def test_update_sort_order(self):
        response = self.send('patch', '/api/tasks/sort-order', {'items': [
            {'task_id': self.a.id, 'sort_order': 5},
            {'task_id': self.b.id, 'sort_order': 2},
        ]})

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.titles(), ['b', 'a'])

    def test_update_sort_order_rolls_back_on_foreign_task(self):
        response = self.send('patch', '/api/tasks/sort-order', {'items': [
            {'task_id': self.a.id, 'sort_order': 5},
            {'task_id': self.foreign.id, 'sort_order': 6},
        ]})

        self.assertEqual(response.status_code, 403)
        self.a.refresh_from_db()
        self.assertEqual(self.a.sort_order, 0)

    def test_reorder(self):
        response = self.send('put', '/api/tasks/reorder', {'task_ids': [self.b.id, self.a.id]})

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.titles(), ['b', 'a'])

    def test_reorder_with_missing_task(self):
        response = self.send('put', '/api/tasks/reorder', {'task_ids': [self.b.id, 99999]})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['code'], 'Task.NotFound')
        self.assertEqual(self.titles(), ['a', 'b'])


class FilterAPITest(TaskAPITestCase):

    def setUp(self):
        super().setUp()
        Task.objects.create(user=self.owner, title='low', priority=Priority.LOW, sort_order=0)
        Task.objects.create(user=self.owner, title='high open', priority=Priority.HIGH, sort_order=1)
        Task.objects.create(user=self.owner, title='high done', priority=Priority.HIGH, sort_order=2, is_complete=True)
        Task.objects.create(user=self.other, title='theirs', priority=Priority.HIGH)

    def test_list_filtered_by_priority(self):
        response = self.send('get', '/api/tasks?priority=2')

        self.assertEqual(response.status_code, 200)
        self.assertEqual([task['title'] for task in response.json()], ['high open', 'high done'])

    def test_list_filtered_by_priority_and_completion(self):
        response = self.send('get', '/api/tasks?priority=2&is_complete=true')
        self.assertEqual([task['title'] for task in response.json()], ['high done'])

    def test_paginated_filtered_by_priority(self):
        body = self.send('get', '/api/tasks/paginated?priority=2&page_size=1').json()

        self.assertEqual(body['total_count'], 2)
        self.assertEqual(body['total_pages'], 2)
        self.assertEqual([task['title'] for task in body['items']], ['high open'])

    def test_unknown_priority_is_rejected(self):
        response = self.send('get', '/api/tasks?priority=9')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'Validation.Error')


class IntegerRangeAPITest(TaskAPITestCase):
    """Values outside the database column ranges fail validation, not the ORM."""

    def assertValidationError(self, response):
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'Validation.Error')

    def test_create_with_oversized_sort_order(self):
        self.assertValidationError(self.send('post', '/api/tasks', {'title': 'x', 'sort_order': 2 ** 63}))
        self.assertValidationError(self.send('post', '/api/tasks', {'title': 'x', 'sort_order': 2 ** 31}))
        self.assertFalse(Task.objects.exists())

    def test_create_with_largest_sort_order(self):
        response = self.send('post', '/api/tasks', {'title': 'x', 'sort_order': 2 ** 31 - 1})

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['sort_order'], 2 ** 31 - 1)

    def test_update_with_undersized_sort_order(self):
        task = Task.objects.create(user=self.owner, title='Mine')

        response = self.send('put', f'/api/tasks/{task.id}', {'title': 'Mine', 'sort_order': -2 ** 31 - 1})

        self.assertValidationError(response)

    def test_sort_order_items_are_bounded(self):
        task = Task.objects.create(user=self.owner, title='Mine')

        response = self.send('patch', '/api/tasks/sort-order', {'items': [
            {'task_id': task.id, 'sort_order': 2 ** 40},
        ]})

        self.assertValidationError(response)
        task.refresh_from_db()
        self.assertEqual(task.sort_order, 0)

    def test_reorder_ids_are_bounded(self):
        self.assertValidationError(self.send('put', '/api/tasks/reorder', {'task_ids': [2 ** 64]}))
