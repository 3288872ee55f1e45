from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from django.core import exceptions as django_exc

from .models import CustomUser


class RegistrationSerializer(serializers.ModelSerializer):
    """Registration payload -> creates a user and hashes password."""
    password = serializers.CharField(write_only=True, required=True, style={'input_type': 'password'})
    telephone = serializers.CharField(required=False, allow_blank=True, max_length=30)

    class Meta:
        model = CustomUser
        fields = ('email', 'password', 'name', 'telephone')

    def validate_password(self, value):
        """Run Django's password validators (AUTH_PASSWORD_VALIDATORS)."""
        try:
            validate_password(value)
        except django_exc.ValidationError as e:
            # Return list of readable error messages
            raise serializers.ValidationError(list(e.messages))
        return value

    def create(self, validated_data):
        # role is never taken from the payload; admins are promoted out of band
        return CustomUser.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data.get('name', ''),
            telephone=validated_data.get('telephone', ''),
        )


class CustomUserSerializer(serializers.ModelSerializer):
    """Representation of a user; role is read-only for API clients."""

    class Meta:
        model = CustomUser
        fields = ('id', 'email', 'name', 'telephone', 'role')
        read_only_fields = ('id', 'email', 'role')
