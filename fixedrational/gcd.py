def trailing_zero_bits(x: int) -> int:
    return (x & -x).bit_length() - 1


def gcd(x: int, y: int) -> int:
    """Greatest common divisor of two non-negative magnitudes.

    Binary (Stein's) algorithm: no division, only shifts and subtraction.

    1) x and y both even:  gcd(x, y) = 2 * gcd(x / 2, y / 2)
    2) x even, y odd:      gcd(x, y) = gcd(x / 2, y)
    3) x and y both odd:   gcd(x, y) = gcd(|x - y|, min(x, y))

    gcd(0, y) = y and gcd(x, 0) = x, so gcd(0, 0) = 0.
    """
    if x < 0 or y < 0:
        raise ValueError("gcd is defined over magnitudes")
    if x == 0:
        return y
    if y == 0:
        return x

    xtz = trailing_zero_bits(x)
    ytz = trailing_zero_bits(y)
    y >>= ytz
    while True:
        x >>= trailing_zero_bits(x)
        # both odd here
        if x < y:
            x, y = y, x
        x -= y
        if x == 0:
            break
    return y << min(xtz, ytz)


def reduced(numerator: int, denominator: int) -> (int, int):
    g = gcd(numerator, denominator)
    # 61% of random integer pairs are coprime
    if g == 1:
        return numerator, denominator
    return numerator // g, denominator // g
