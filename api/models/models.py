from api.config import Base
from sqlalchemy import Column, Integer, String, JSON, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True)
    hashed_password = Column(String)
    preferences = Column(JSON)


class Course(Base):
    __tablename__ = "courses"
    id = Column(String, primary_key=True, index=True)  # uuid
    slug = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String, nullable=True)
    color = Column(String, nullable=True)
    difficulty = Column(String, nullable=True)
    duration = Column(String, nullable=True)
    stages_count = Column(Integer, default=0, nullable=False)  # advertised; progress counts real rows
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    stages = relationship("LearningStage", backref="course", cascade="all, delete-orphan")
    quizzes = relationship("Quiz", backref="course", cascade="all, delete-orphan")


class LearningStage(Base):
    __tablename__ = "learning_stages"
    __table_args__ = (UniqueConstraint("course_id", "order_index", name="uq_learning_stage_order"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    order_index = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    content = Column(Text, nullable=True)
    article = Column(JSON, nullable=True)  # {content, reading_time}
    video_url = Column(String, nullable=True)
    video_duration = Column(Integer, nullable=True)
    difficulty = Column(String, nullable=True)
    tags = Column(JSON, nullable=True)  # list[str]
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Quiz(Base):
    __tablename__ = "quizzes"
    __table_args__ = (UniqueConstraint("course_id", "order_index", name="uq_quiz_order"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    order_index = Column(Integer, nullable=False)  # same as the stage it belongs to
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    questions = Column(JSON, nullable=False)  # list of question dicts
    passing_score = Column(Integer, nullable=True)
    time_limit = Column(Integer, nullable=True)  # minutes
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class UserQuizProgress(Base):
    __tablename__ = "user_quiz_progress"
    __table_args__ = (UniqueConstraint("user_id", "quiz_id", name="uq_user_quiz_progress"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    quiz_id = Column(String, ForeignKey("quizzes.id"), index=True, nullable=False)
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    score = Column(Integer, nullable=False)  # latest attempt, percent
    best_score = Column(Integer, nullable=False)
    attempts_count = Column(Integer, default=1, nullable=False)
    time_taken = Column(Integer, nullable=True)  # minutes
    completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", backref="quiz_progress", foreign_keys=[user_id])
    quiz = relationship("Quiz", foreign_keys=[quiz_id])


class UserLearningStageProgress(Base):
    __tablename__ = "user_learning_stage_progress"
    __table_args__ = (UniqueConstraint("user_id", "learning_stage_id", name="uq_user_stage_progress"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    learning_stage_id = Column(String, ForeignKey("learning_stages.id"), index=True, nullable=False)
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    # Row existence means completed; never updated after insert.
    completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", backref="stage_progress", foreign_keys=[user_id])
    stage = relationship("LearningStage", foreign_keys=[learning_stage_id])
