"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- Teacher: professor accounts (role="professor")
- Student: student accounts (role="aluno")
- Post: blog post with its embedded comment array
"""
from .principal import Principal, Teacher, Student, PROFESSOR, ALUNO
from .post import Post
