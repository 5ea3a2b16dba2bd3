"""
Sample content: the "Python Variables" quiz, stored exactly as the content
editor writes it (camelCase keys, question list as JSON).
"""

def _opt(oid: str, text: str, correct: bool = False) -> dict:
    return {"id": oid, "text": text, "isCorrect": correct}


PYTHON_VARIABLES_QUESTIONS: list[dict] = [
    {
        "id": "q1",
        "type": "single_choice",
        "question": "What is a variable in Python?",
        "options": [
            _opt("q1_a", "A container for storing data values", True),
            _opt("q1_b", "A function that performs calculations"),
            _opt("q1_c", "A type of loop structure"),
            _opt("q1_d", "A built-in Python module"),
        ],
    },
    {
        "id": "q2",
        "type": "multiple_choice",
        "question": "Which of the following are valid Python data types?",
        "options": [
            _opt("q2_a", "str (String)", True),
            _opt("q2_b", "int (Integer)", True),
            _opt("q2_c", "float (Float)", True),
            _opt("q2_d", "bool (Boolean)", True),
            _opt("q2_e", "char (Character)"),
        ],
    },
    {
        "id": "q3",
        "type": "single_choice",
        "question": "How do you create a variable in Python?",
        "options": [
            _opt("q3_a", "var name = value"),
            _opt("q3_b", "name = value", True),
            _opt("q3_c", "let name = value"),
            _opt("q3_d", "const name = value"),
        ],
    },
    {
        "id": "q4",
        "type": "single_choice",
        "question": "What function can you use to check the type of a variable?",
        "options": [
            _opt("q4_a", "typeof()"),
            _opt("q4_b", "type()", True),
            _opt("q4_c", "getType()"),
            _opt("q4_d", "checkType()"),
        ],
    },
    {
        "id": "q5",
        "type": "multiple_choice",
        "question": "Which of the following are valid variable names in Python?",
        "options": [
            _opt("q5_a", "user_name", True),
            _opt("q5_b", "age", True),
            _opt("q5_c", "2name"),
            _opt("q5_d", "my_variable", True),
            _opt("q5_e", "class"),
        ],
    },
    {
        "id": "q6",
        "type": "single_choice",
        "question": 'What will be the output of: print(type("Python"))?',
        "options": [
            _opt("q6_a", "<class 'str'>", True),
            _opt("q6_b", "<class 'string'>"),
            _opt("q6_c", "string"),
            _opt("q6_d", "text"),
        ],
    },
    {
        "id": "q7",
        "type": "multiple_choice",
        "question": "Which of the following statements about Python variables are true?",
        "options": [
            _opt("q7_a", "Variables are case-sensitive", True),
            _opt("q7_b", "You must declare the type when creating a variable"),
            _opt("q7_c", "Variables can be reassigned to different types", True),
            _opt("q7_d", "Variable names can contain spaces"),
            _opt("q7_e", "Python is dynamically typed", True),
        ],
    },
    {
        "id": "q8",
        "type": "single_choice",
        "question": "What is the correct way to assign multiple variables in one line?",
        "options": [
            _opt("q8_a", "x = 1, y = 2, z = 3"),
            _opt("q8_b", "x, y, z = 1, 2, 3", True),
            _opt("q8_c", "x; y; z = 1; 2; 3"),
            _opt("q8_d", "x & y & z = 1 & 2 & 3"),
        ],
    },
]

PYTHON_VARIABLES_QUIZ: dict = {
    "id": "python-variables-quiz-1",
    "title": "Python Variables Mastery Quiz",
    "description": "Test your understanding of Python variables, data types, and naming conventions.",
    "passingScore": 70,
    "timeLimit": 15,
    "questions": PYTHON_VARIABLES_QUESTIONS,
}

# question id -> fully correct answer
PYTHON_VARIABLES_ANSWER_KEY: dict = {
    "q1": "q1_a",
    "q2": ["q2_a", "q2_b", "q2_c", "q2_d"],
    "q3": "q3_b",
    "q4": "q4_b",
    "q5": ["q5_a", "q5_b", "q5_d"],
    "q6": "q6_a",
    "q7": ["q7_a", "q7_c", "q7_e"],
    "q8": "q8_b",
}
