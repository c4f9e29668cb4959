from pydantic import BaseModel


class GradeBucket(BaseModel):
    grade: str
    count: int


class AssignmentStats(BaseModel):
    total_submissions: int
    evaluated_count: int
    passed_count: int
    pass_rate: int
    grade_distribution: list[GradeBucket]

    @property
    def has_grades(self) -> bool:
        return any(b.count > 0 for b in self.grade_distribution)

    def bucket(self, grade: str) -> int:
        for b in self.grade_distribution:
            if b.grade == grade:
                return b.count
        raise KeyError(grade)


class DashboardTotals(BaseModel):
    total_assignments: int
    total_submissions: int
    evaluated: int
