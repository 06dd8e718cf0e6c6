from logic.errors import ProjectionRangeError
from logic.models import CompensationPackage


def _check_year(package: CompensationPackage, year: int) -> None:
    if year < 0 or year >= len(package.growth):
        raise ProjectionRangeError("growth", year, len(package.growth))


def project_salary(package: CompensationPackage, year: int) -> float:
    """
    Base salary for a 0-based year index.
    Growth compounds through the requested year inclusive, so year 0 already
    carries growth[0].
    """
    _check_year(package, year)
    salary = package.base
    for step in package.growth[:year + 1]:
        salary *= (1 + step.salary_growth / 100.0)
    return salary


def project_bonus(package: CompensationPackage, year: int) -> float:
    return project_salary(package, year) * (package.growth[year].bonus_percentage / 100.0)
