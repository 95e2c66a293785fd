"""Operations behind the CLI commands. Each returns a ServiceResult."""
