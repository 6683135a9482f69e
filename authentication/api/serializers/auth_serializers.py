from rest_framework import serializers

from authentication.domain.models import CustomUser


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ("id", "name", "email", "role")
        read_only_fields = fields


class SignupSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150, trim_whitespace=True)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    role = serializers.CharField(required=False, allow_blank=True, default=CustomUser.ROLE_CUSTOMER)

    def validate_email(self, value):
        return value.strip().lower()

    def validate_role(self, value):
        role = (value or CustomUser.ROLE_CUSTOMER).strip().lower()
        if role not in dict(CustomUser.ROLE_CHOICES):
            raise serializers.ValidationError("Invalid role selected")
        return role


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})

    def validate_email(self, value):
        return value.strip().lower()
