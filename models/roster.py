# models/roster.py

"""
The fixed class roster and its group partition.

Groups 1-6 are offered for data entry. Group 6 currently has no members;
selecting it yields an empty entry session.
"""

from models.student import Student

GROUPS: tuple[int, ...] = (1, 2, 3, 4, 5, 6)

STUDENTS: tuple[Student, ...] = (
    Student(12, "杰薰", 1),
    Student(3, "李秉宸", 1),
    Student(8, "何品諺", 1),
    Student(17, "鄒宜彤", 1),
    Student(26, "鄭舒云", 1),
    Student(9, "陳庭宇", 2),
    Student(1, "林田能", 2),
    Student(24, "謝靚橙", 2),
    Student(15, "林子晴", 2),
    Student(18, "葉雯鏵", 2),
    Student(2, "程競弘", 3),
    Student(6, "曾恆昱", 3),
    Student(22, "王若和", 3),
    Student(25, "蕭禾婕", 3),
    Student(16, "鄒采妤", 3),
    Student(13, "許芮棠", 3),
    Student(11, "游子靖", 4),
    Student(4, "劉岱儒", 4),
    Student(19, "林苡媗", 4),
    Student(21, "莊芝棋", 4),
    Student(14, "劉紜瑄", 4),
    Student(7, "朱予行", 5),
    Student(10, "池向毅", 5),
    Student(5, "童宥森", 5),
    Student(20, "吳予潔", 5),
    Student(23, "黃品瑜", 5),
)


def students_in_group(
    group: int, roster: tuple[Student, ...] | list[Student] = STUDENTS
) -> list[Student]:
    return [student for student in roster if student.group == group]


def find_student(
    student_id: int, roster: tuple[Student, ...] | list[Student] = STUDENTS
) -> Student | None:
    for student in roster:
        if student.id == student_id:
            return student

    return None
