from django.db import models


class Priority(models.IntegerChoices):
    LOW = 0, 'Low'
    MEDIUM = 1, 'Medium'
    HIGH = 2, 'High'


class Task(models.Model):
    """
    A to-do item. Exclusively owned by one user; only the owner may
    read, change or delete it.
    """
    user = models.ForeignKey(
        'identity.User',
        on_delete=models.CASCADE,
        related_name='tasks',
    )
    title = models.CharField(max_length=200)
    description = models.TextField(max_length=2000, blank=True, default='')
    is_complete = models.BooleanField(default=False)
    priority = models.IntegerField(choices=Priority.choices, default=Priority.MEDIUM)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'id']
        indexes = [
            models.Index(fields=['user', 'sort_order'], name='ix_tasks_user_sort_order'),
        ]

    def __str__(self):
        return self.title
