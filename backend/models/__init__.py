from models.college import College
from models.combined_course import CombinedCourse
from models.combined_course_offering import CombinedCourseOffering
from models.course import Course
from models.department import Department
from models.level import Level
from models.program import Program
from models.staff import Staff
from models.venue import Venue

__all__ = [
	"College",
	"CombinedCourse",
	"CombinedCourseOffering",
	"Course",
	"Department",
	"Level",
	"Program",
	"Staff",
	"Venue",
]
