from numtheory.primes import generate_primes

def test_primes_up_to_thirty():
    assert generate_primes(30) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]

def test_bound_is_inclusive():
    assert generate_primes(2) == [2]
    assert generate_primes(29)[-1] == 29

def test_small_bounds():
    assert generate_primes(1) == []
    assert generate_primes(0) == []
    assert generate_primes(-10) == []

def test_prime_count_below_ten_thousand():
    assert len(generate_primes(10000)) == 1229
