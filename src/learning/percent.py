def percentage(part: int, whole: int) -> int:
    """
    Integer percentage of part/whole, rounded half-up (12.5 -> 13).

    Returns 0 when whole is zero or negative: an empty quiz or a course with no
    stages and no quizzes has made no progress.
    """
    if whole <= 0:
        return 0
    part = max(0, part)
    # Integer arithmetic so ties never fall victim to float representation.
    return (200 * part + whole) // (2 * whole)
