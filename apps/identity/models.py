from django.db import models


class User(models.Model):
    """
    Application account. Authenticates with email + password and owns tasks.

    The email is stored lowercase; password_hash holds base64(salt + PBKDF2 hash),
    see security.hash_password().
    """
    email = models.EmailField(max_length=256, unique=True)
    password_hash = models.CharField(max_length=255)
    first_name = models.CharField(max_length=100, null=True, blank=True)
    last_name = models.CharField(max_length=100, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['email']

    def __str__(self):
        return self.email
